# scripts/serve_api.py
import argparse

import uvicorn

from jobfinder.api.app import create_app

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Serve the search and listing endpoints.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    args = parser.parse_args()
    uvicorn.run(create_app(), host=args.host, port=args.port)
