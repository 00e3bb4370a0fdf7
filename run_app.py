#!/usr/bin/env python3
"""
Storefront Backend Runner
=========================

Usage:
    python run_app.py                    # Development server with auto-reload
    python run_app.py --mode prod        # Production mode
    python run_app.py --port 8001        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
    python run_app.py --init-db          # Create tables and exit
"""

import argparse
import asyncio
import os
import sys

def check_environment():
    """Check if environment is properly set up"""
    print("\nChecking environment...")

    if os.path.exists(".env"):
        print(".env file found")
    elif not os.environ.get("SECRET_KEY"):
        print("SECRET_KEY is not set. Create a .env file or export it.")
        return False
    else:
        print(".env file not found, using environment")

    return True

def run_main_app(host, port, reload, workers):
    """Run the FastAPI application"""
    import uvicorn

    print(f"\nStarting storefront API on {host}:{port}")
    print(f"API Docs: http://{host}:{port}/api/docs")
    print("\n" + "=" * 50)

    try:
        uvicorn.run(
            "storefront.main:app",
            host=host,
            port=port,
            reload=reload,
            workers=1 if reload else workers,
            log_level="info"
        )
    except KeyboardInterrupt:
        print("\nServer stopped by user")

def create_tables():
    """Create database tables without starting the server"""
    from storefront.core.database import init_db, close_db
    from storefront.core.logging import setup_logging

    async def _run():
        setup_logging()
        await init_db()
        await close_db()

    asyncio.run(_run())
    print("Database tables created")

def main():
    parser = argparse.ArgumentParser(
        description="Storefront Backend Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument(
        "--host",
        default="0.0.0.0",
        help="Host to bind to (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Worker processes in prod mode (default: 4)"
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload"
    )
    parser.add_argument(
        "--init-db",
        action="store_true",
        help="Create database tables and exit"
    )

    args = parser.parse_args()

    if not check_environment():
        return 1

    if args.init_db:
        create_tables()
        return 0

    reload = not args.no_reload and args.mode != "prod"
    run_main_app(args.host, args.port, reload, args.workers)

    return 0

if __name__ == "__main__":
    sys.exit(main())
