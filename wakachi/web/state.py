"""Service state shared by every request of the web application."""

import logging
from dataclasses import dataclass

from ..config import Config
from ..engine import construct_engine
from ..formatters import get_formatter
from ..handle import EngineHandle, create_handle
from ..pipeline import RequestPipeline

logger = logging.getLogger(__name__)


@dataclass
class ServiceState:
    """Holds everything built once at startup and kept for the process lifetime."""

    config: Config
    handle: EngineHandle
    pipeline: RequestPipeline


def build_state(config: Config, engine=None) -> ServiceState:
    """
    Build the engine, its handle and the request pipeline.

    Args:
        config: The resolved configuration.
        engine: An already constructed engine. When omitted the engine is
            built from ``config``.

    Returns:
        ServiceState: The state the web application serves from.

    Raises:
        EngineConstructionError: If the engine cannot be built.
    """
    if engine is None:
        engine = construct_engine(config)

    handle = create_handle(engine, config.engine_policy)
    pipeline = RequestPipeline(handle, get_formatter(config.output_format))
    logger.info(
        "service ready: policy=%s format=%s",
        handle.policy.value,
        config.output_format.value,
    )
    return ServiceState(config=config, handle=handle, pipeline=pipeline)
