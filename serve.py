#!/usr/bin/env python3
"""Launch the jobrank API server."""
import argparse
import os

import uvicorn

from jobrank.api.app import create_app


def main():
    parser = argparse.ArgumentParser(description="jobrank API Server")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")
    parser.add_argument("--catalog", default=None, help="Catalog JSON (default: JOBRANK_CATALOG or ./catalog.json)")
    parser.add_argument("--state", default=None, help="Saved progress JSON (default: JOBRANK_STATE)")
    args = parser.parse_args()

    if args.catalog:
        os.environ["JOBRANK_CATALOG"] = args.catalog
    if args.state:
        os.environ["JOBRANK_STATE"] = args.state

    uvicorn.run(create_app(), host=args.host, port=args.port)


if __name__ == "__main__":
    main()
