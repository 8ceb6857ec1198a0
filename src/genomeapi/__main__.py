"""Entry point for running genomeapi as a module: python -m genomeapi."""

import logging
import sys

from .config import GenomeApiConfig
from .middleware.sessions import SessionPolicy
from .server import create_server

logger = logging.getLogger("genomeapi")


def _configure_logging(level: str) -> None:
    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _serve_http(server, config: GenomeApiConfig) -> None:  # noqa: ANN001
    """Serve the SSE or streamable-HTTP app with uvicorn behind the rate limiter."""
    import anyio
    import uvicorn

    from .middleware.ratelimit import RateLimitMiddleware

    app = server.sse_app() if config.transport == "sse" else server.streamable_http_app()

    policy = SessionPolicy.from_config(config)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=policy.rate_limit_max_requests,
        window_seconds=policy.rate_limit_window_seconds,
    )

    uvi_server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
        )
    )
    anyio.run(uvi_server.serve)


def main() -> None:
    """Run the genomeapi MCP server."""
    try:
        config = GenomeApiConfig.from_env()
    except ValueError as e:
        print(f"Invalid genomeapi configuration: {e}", file=sys.stderr)
        sys.exit(1)

    _configure_logging(config.log_level)
    if config.analyze_variant_url is None:
        logger.warning("GENOMEAPI_ANALYZE_VARIANT_URL is not set; variant analysis is disabled")

    server = create_server(config)
    logger.info("Starting genomeapi (%s transport)", config.transport)

    if config.transport == "stdio":
        server.run(transport="stdio")
    else:
        _serve_http(server, config)


if __name__ == "__main__":
    main()
