"""
Payments Admin Backend — Uvicorn Launcher
Run this file to start the development server.

Usage:
    python run.py
    python run.py --port 8000
    python run.py --reload
"""
import argparse
import uvicorn

from app.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Payments Admin Backend Server")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"Bind port (default: {settings.PORT})")
    parser.add_argument("--reload", action="store_true", help="Enable hot reload for development")
    parser.add_argument("--workers", type=int, default=1, help="Number of workers (default: 1)")

    args = parser.parse_args()

    print(f"""
    ========================================================
      {settings.APP_NAME}
      API:     http://{args.host}:{args.port}
      Docs:    http://localhost:{args.port}/docs
      Health:  http://localhost:{args.port}/health
    ========================================================
    """)

    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=args.workers,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
