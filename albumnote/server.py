"""Server entry point for running the FastAPI application."""

import asyncio
import signal

import uvicorn
from dotenv import load_dotenv

from .config import Settings

# Load environment variables from .env file
load_dotenv()


class Server:
    """Custom server wrapper with proper signal handling."""

    def __init__(self, config: uvicorn.Config):
        self.server = uvicorn.Server(config)

    def handle_exit(self, _sig, _frame):
        """Ask uvicorn to finish in-flight requests and stop."""
        print("\n[INFO] Received shutdown signal, stopping server...")
        self.server.should_exit = True

    async def serve(self):
        """Run the server with proper signal handling."""
        signal.signal(signal.SIGINT, self.handle_exit)
        signal.signal(signal.SIGTERM, self.handle_exit)

        await self.server.serve()


def run_server(host: str | None = None, port: int | None = None, reload: bool = False):
    """Run the FastAPI server."""
    settings = Settings.from_env()
    host = host or settings.host
    port = port or settings.port

    if reload:
        # Ctrl-C handling may be degraded in reload mode due to subprocess
        uvicorn.run(
            "albumnote.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level="info",
            access_log=False,
        )
    else:
        config = uvicorn.Config(
            "albumnote.app:app",
            host=host,
            port=port,
            log_level="info",
            access_log=False,
        )
        asyncio.run(Server(config).serve())


if __name__ == "__main__":
    run_server(reload=True)
