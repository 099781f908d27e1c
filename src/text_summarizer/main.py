from __future__ import annotations
import logging
import uvicorn
from text_summarizer.infrastructure.config import get_settings

# Third-party loggers that are chatty at INFO.
_QUIET_LOGGERS = ("httpx", "httpcore", "openai")


def configure_logging(level: str) -> None:
    """Root logging setup shared by the server and ad-hoc scripts."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def main() -> None:
    """Start the uvicorn ASGI server."""
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "text_summarizer.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
