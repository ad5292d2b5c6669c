"""
Command-line entry point for the tokenization server.

Every flag falls back to a ``WAKACHI_*`` environment variable, then to its
built-in default. Invalid configuration or a dictionary that cannot be
loaded stops the process with status 1 before any socket is bound.

Example:
    $ wakachi-server -t core -m search -f detailed -p 8080
    $ WAKACHI_DICT_TYPE=local WAKACHI_DICT=/opt/dic/system.dic wakachi-server
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

import uvicorn

from . import __version__
from .config import DEFAULT_DICTIONARY_KIND, DEFAULT_HOST, DEFAULT_PORT, resolve
from .exceptions import ConfigurationError, EngineConstructionError
from .web import build_state, create_app

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(f"WAKACHI_{name}", default)


def _env_flag(name: str) -> bool:
    return _env(name, "").strip().lower() in ("1", "true", "yes", "on")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser, with defaults taken from the environment."""
    parser = argparse.ArgumentParser(
        prog="wakachi-server",
        description="Morphological tokenization over HTTP",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-H", "--host",
        default=_env("HOST", DEFAULT_HOST),
        metavar="HOST",
        help="Host address",
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        default=_env("PORT", str(DEFAULT_PORT)),
        metavar="PORT",
        help="HTTP port",
    )
    parser.add_argument(
        "-t", "--dict-type",
        default=_env("DICT_TYPE", DEFAULT_DICTIONARY_KIND),
        metavar="DICT_TYPE",
        help="The dictionary type. small, core, full (when installed) and local are available.",
    )
    parser.add_argument(
        "-d", "--dict",
        default=_env("DICT"),
        metavar="DICT",
        help='Path of the system dictionary, required when the dictionary type is "local".',
    )
    parser.add_argument(
        "-D", "--user-dict",
        default=_env("USER_DICT"),
        metavar="USER_DICT",
        help="The user dictionary file path.",
    )
    parser.add_argument(
        "-T", "--user-dict-type",
        default=_env("USER_DICT_TYPE"),
        metavar="USER_DICT_TYPE",
        help="The user dictionary type. csv and bin are available.",
    )
    parser.add_argument(
        "-m", "--mode",
        default=_env("MODE", "normal"),
        metavar="MODE",
        help="The tokenization mode. normal, search and decompose are available.",
    )
    parser.add_argument(
        "-f", "--format",
        default=_env("FORMAT", "simple"),
        metavar="FORMAT",
        help="The response format. simple, detailed and native are available.",
    )
    parser.add_argument(
        "--policy",
        default=_env("POLICY", "exclusive"),
        metavar="POLICY",
        help="How requests share the engine. exclusive and shared are available.",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        default=_env_flag("DEMO"),
        help="Also serve GET / with a fixed example tokenization.",
    )
    parser.add_argument(
        "--log-level",
        default=_env("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Resolve the configuration, build the engine and serve until terminated.

    Returns:
        int: Exit status. 1 when startup fails.
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level, logging.INFO), format=LOG_FORMAT)

    try:
        config = resolve(
            dictionary_kind=args.dict_type,
            dictionary_path=args.dict,
            user_dictionary_path=args.user_dict,
            user_dictionary_type=args.user_dict_type,
            mode=args.mode,
            host=args.host,
            port=args.port,
            output_format=args.format,
            engine_policy=args.policy,
            demo=args.demo,
        )
        logger.info("configuration: %s", config)
        state = build_state(config)
    except (ConfigurationError, EngineConstructionError) as e:
        print(f"wakachi-server: {e}", file=sys.stderr)
        return 1

    logger.info("listening on http://%s:%s", config.host, config.port)
    uvicorn.run(create_app(state), host=config.host, port=config.port, workers=1)
    return 0


if __name__ == "__main__":
    sys.exit(main())
