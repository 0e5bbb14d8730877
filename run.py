"""Development launcher for the API server."""
import logging


def main() -> None:
    import uvicorn
    from server.config import ServerConfig

    logging.basicConfig(level=logging.INFO)
    config = ServerConfig()

    uvicorn.run(
        "server.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=config.PORT,
    )


if __name__ == "__main__":
    main()
