"""
SudachiPy integration: backend detection and dictionary loading.

SudachiPy is the morphological analyzer behind the service. It ships its
system dictionaries as separate packages (``sudachidict_small``,
``sudachidict_core``, ``sudachidict_full``) and also loads a compiled
``system.dic`` from any path.

Availability is checked once on import so that the rest of the package can
fail early with a clear message when the backend is missing.

Installation:
    pip install sudachipy sudachidict_core

Example:
    >>> from wakachi.engine.tokenizers import has_sudachi, load_dictionary
    >>> if has_sudachi():
    ...     dictionary = load_dictionary("core")
"""

import atexit
import importlib
import importlib.util
import logging
import tempfile
from pathlib import Path
from typing import List, Optional

from ..exceptions import EngineConstructionError

logger = logging.getLogger(__name__)

# Check if SudachiPy is available using importlib
_sudachi_available = importlib.util.find_spec("sudachipy") is not None

_sudachi_dictionary = None
_sudachi_tokenizer = None

if _sudachi_available:
    from sudachipy import dictionary as _sudachi_dictionary  # type: ignore
    from sudachipy import tokenizer as _sudachi_tokenizer  # type: ignore

# Compiled user dictionaries, removed when the process exits
_compiled_dirs: List[tempfile.TemporaryDirectory] = []


def remove_compiled_dictionaries() -> None:
    """Delete every user dictionary compiled by this process."""
    while _compiled_dirs:
        _compiled_dirs.pop().cleanup()


atexit.register(remove_compiled_dictionaries)


def has_sudachi() -> bool:
    """
    Check if SudachiPy can be imported.

    Returns:
        bool: True if the sudachipy package is installed.
    """
    return _sudachi_available


def split_mode(name: str):
    """
    Map a split mode letter ('A', 'B' or 'C') to Sudachi's SplitMode.

    SplitMode options:
      - A: Short unit
      - B: Middle unit
      - C: Long unit (named entities kept together)
    """
    _require_sudachi()
    return getattr(_sudachi_tokenizer.Tokenizer.SplitMode, name)


def system_dictionary_path(kind_or_path: str) -> str:
    """
    Return the file path of a system dictionary.

    Args:
        kind_or_path: A dictionary package kind ('small', 'core', 'full') or
            a path to a compiled ``system.dic``.

    Returns:
        str: Path of the ``system.dic`` file.

    Raises:
        EngineConstructionError: If the package is not installed or the
            file does not exist.
    """
    if kind_or_path in ("small", "core", "full"):
        package = f"sudachidict_{kind_or_path}"
        try:
            module = importlib.import_module(package)
        except ImportError as e:
            raise EngineConstructionError(
                f"{package} is not installed. Install it with: pip install {package}"
            ) from e
        resources = Path(module.__file__).parent / "resources"
        path = resources / "system.dic"
        if not path.is_file():
            # Newer dictionary packages name the file after the edition
            path = next(iter(sorted(resources.glob("*.dic"))), path)
    else:
        path = Path(kind_or_path)

    if not path.is_file():
        raise EngineConstructionError(f"system dictionary not found: {path}")
    return str(path)


def compile_user_dictionary(csv_path: str, system: str) -> str:
    """
    Compile a CSV user dictionary into Sudachi's binary format.

    The binary is written to a temporary directory that is removed when the
    process exits (see :func:`remove_compiled_dictionaries`).

    Args:
        csv_path: Path of the user dictionary source in Sudachi CSV format.
        system: Dictionary kind or path of the system dictionary it is
            compiled against.

    Returns:
        str: Path of the compiled user dictionary.

    Raises:
        EngineConstructionError: If the file is missing or compilation fails.
    """
    _require_sudachi()
    if not Path(csv_path).is_file():
        raise EngineConstructionError(f"user dictionary not found: {csv_path}")

    system_path = system_dictionary_path(system)

    workdir = tempfile.TemporaryDirectory(prefix="wakachi-")
    output = str(Path(workdir.name) / "user.dic")
    try:
        from sudachipy import sudachipy as _native  # type: ignore

        _native.build_user_dic(
            system=system_path,
            lex=[csv_path],
            output=output,
            description=f"compiled from {Path(csv_path).name}",
        )
    except Exception as e:
        workdir.cleanup()
        raise EngineConstructionError(
            f"failed to compile user dictionary {csv_path}: {e}"
        ) from e

    _compiled_dirs.append(workdir)
    logger.info("compiled user dictionary %s -> %s", csv_path, output)
    return output


def load_dictionary(kind_or_path: str, user_dictionary: Optional[str] = None):
    """
    Load a Sudachi dictionary.

    Args:
        kind_or_path: 'small', 'core', 'full' or a path to a ``system.dic``.
        user_dictionary: Optional path of a binary user dictionary.

    Returns:
        sudachipy.Dictionary: The loaded dictionary.

    Raises:
        EngineConstructionError: If the dictionary cannot be loaded.
    """
    _require_sudachi()

    if user_dictionary is not None and not Path(user_dictionary).is_file():
        raise EngineConstructionError(f"user dictionary not found: {user_dictionary}")

    try:
        kwargs = {"dict": kind_or_path}
        if user_dictionary is not None:
            from sudachipy import Config  # type: ignore

            kwargs["config"] = Config(user=[user_dictionary])
        return _sudachi_dictionary.Dictionary(**kwargs)
    except Exception as e:
        raise EngineConstructionError(f"failed to load dictionary {kind_or_path}: {e}") from e


def _require_sudachi() -> None:
    if not _sudachi_available:
        raise EngineConstructionError(
            "sudachipy is not installed. Install it with: pip install sudachipy sudachidict_core"
        )


__all__ = [
    "has_sudachi",
    "split_mode",
    "system_dictionary_path",
    "compile_user_dictionary",
    "remove_compiled_dictionaries",
    "load_dictionary",
]
