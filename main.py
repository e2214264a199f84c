#!/usr/bin/env python3
"""
PeerRate -- user registration, bearer-token login and peer ratings over HTTP.

Usage:
  python main.py
  python main.py --host 0.0.0.0 --port 3000
  python main.py --reload

Environment variables (or .env):
  SECRET_KEY      JWT signing key, at least 32 characters. Required unless DEBUG=true.
  DEBUG           true to auto-generate a throwaway SECRET_KEY for local development.
  STRICT_RATING   true to require the token identity to match fromUsername on POST /rate.
"""

import argparse

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Run the PeerRate API server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=3000, help="Port to listen on (default: 3000)")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development only)")
    args = parser.parse_args()

    # The app is passed as an import string so --reload can re-import it.
    uvicorn.run("api.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
