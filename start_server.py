#!/usr/bin/env python3
"""
Start the DAoC Template Builder Web Server

Usage:
    python start_server.py [--port PORT] [--host HOST] [--items PATH ...]

Example:
    python start_server.py --port 8080 --items data/items_alb.xml items/eden_items.ndjson
"""

import argparse
import os
import sys

# Change to the script directory
os.chdir(os.path.dirname(os.path.abspath(__file__)))

# Add paths
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def preload_items(paths):
    """Load item files into the shared catalog before the server starts."""
    from item_database import get_database

    db = get_database()
    for path in paths:
        try:
            added = db.load_file(path)
            print(f"Loaded {added} new items from {path}")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Warning: Failed to load {path}: {e}")
    return db


def main():
    parser = argparse.ArgumentParser(description='DAoC Template Builder Web Server')
    parser.add_argument('--port', type=int, default=8000, help='Port to run the server on')
    parser.add_argument('--host', type=str, default='127.0.0.1', help='Host to bind to')
    parser.add_argument('--reload', action='store_true', help='Enable auto-reload for development')
    parser.add_argument('--items', nargs='*', default=[], metavar='PATH',
                        help='XML or NDJSON item files to preload')
    args = parser.parse_args()
    if args.reload and args.items:
        parser.error("--items cannot be combined with --reload")

    print("=" * 60)
    print("DAoC Template Builder")
    print("=" * 60)

    if args.items:
        db = preload_items(args.items)
        print(f"Catalog: {len(db)} items")

    print()
    print(f"Starting server at http://{args.host}:{args.port}")
    print(f"API Documentation at http://{args.host}:{args.port}/docs")
    print()
    print("Open your browser and navigate to the URL above.")
    print("Press Ctrl+C to stop the server.")
    print("=" * 60)

    import uvicorn
    if args.reload:
        uvicorn.run(
            "api:app",
            host=args.host,
            port=args.port,
            reload=True
        )
    else:
        from api import app
        uvicorn.run(app, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
