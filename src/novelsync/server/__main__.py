"""Entry point for running the server as a module."""

import os

import uvicorn


def main() -> None:
    """Run the FastAPI server."""
    uvicorn.run(
        "novelsync.server.app:create_app",
        factory=True,
        host=os.getenv("NOVELSYNC_HOST", "0.0.0.0"),
        port=int(os.getenv("NOVELSYNC_PORT", "8000")),
        reload=os.getenv("NOVELSYNC_RELOAD", "").lower() in {"1", "true", "yes"},
    )


if __name__ == "__main__":
    main()
