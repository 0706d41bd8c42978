import uvicorn
import os
import argparse

def parse_args():
    parser = argparse.ArgumentParser(description="Run the CFR Regulation Tree API")
    parser.add_argument("--host", default="0.0.0.0", help="Host to bind the server to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind the server to")
    parser.add_argument("--workers", type=int, default=2, help="Number of worker processes")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--log-level", default="info",
                        choices=["trace", "debug", "info", "warning", "error"],
                        help="Log level")
    return parser.parse_args()

if __name__ == "__main__":
    args = parse_args()

    # regtree.main configures logging from LOG_LEVEL when the app is imported
    os.environ["LOG_LEVEL"] = args.log_level.upper()

    config = {
        "app": "regtree.main:app",
        "host": args.host,
        "port": args.port,
        "workers": args.workers,
        "reload": args.reload,
        # uvicorn has its own trace level under the same name
        "log_level": args.log_level.lower(),
    }

    print(f"Starting server with configuration:")
    for key, value in config.items():
        print(f"  {key}: {value}")

    uvicorn.run(**config)
