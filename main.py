#!/usr/bin/env python3
"""
zpool-health - ZFS pool health evaluation
Main entry point for the FastAPI service.
"""

from zpool_health.config import get_config

# Initialize configuration (reads the ZPOOL_HEALTH_* environment)
config = get_config()


def main():
    """Main entry point for the zpool-health API service."""
    import uvicorn
    from zpool_health.main import app

    host, port = config.server.host, config.server.port
    print("Starting zpool-health API service...")
    print(f"Access the API at: http://{host}:{port}")
    if config.server.enable_docs:
        print(f"API documentation at: http://{host}:{port}/docs")
    print("Press Ctrl+C to stop the service")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=config.logging.level.lower()
    )


if __name__ == "__main__":
    main()
