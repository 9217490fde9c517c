"""
Run the Icon Resizer FastAPI server with safe defaults for local use.
By default the server listens on 127.0.0.1 (local-only). Pass the `--allow-remote`
CLI flag (or set ALLOW_REMOTE=1) to bind to 0.0.0.0 and allow other devices on the same network to upload.
"""
import argparse
import uvicorn
from icon_resizer import config as srv_cfg


def choose_host(host=None, allow_remote=False):
    """--allow-remote (or ALLOW_REMOTE in the environment) wins over --host."""
    if allow_remote or srv_cfg.ALLOW_REMOTE:
        return "0.0.0.0"
    return host or "127.0.0.1"


def main(argv=None):
    parser = argparse.ArgumentParser(description="Start the Icon Resizer API server with options")
    parser.add_argument("--host", type=str, default=None,
                        help="Host to bind; default 127.0.0.1 unless --allow-remote is set")
    parser.add_argument("--allow-remote", action="store_true", help="If set, bind to 0.0.0.0 (LAN reachable)")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind")
    parser.add_argument("--allow-origins", type=str, default=None, help="Comma-separated list of CORS origins to allow")
    parser.add_argument("--reload", action="store_true", help="Enable uvicorn reload")
    parser.add_argument("--upload-token", type=str, default=None, help="Optional upload token that the server requires")
    parser.add_argument("--output", type=str, default=None, help="Default output folder for generated files")
    args = parser.parse_args(argv)

    host = choose_host(args.host, args.allow_remote)

    # Set values into icon_resizer.config so the FastAPI code uses them
    srv_cfg.ALLOW_REMOTE = args.allow_remote or srv_cfg.ALLOW_REMOTE
    if args.upload_token:
        srv_cfg.UPLOAD_TOKEN = args.upload_token
    if args.allow_origins:
        srv_cfg.ALLOW_ORIGINS = args.allow_origins
    if args.output:
        srv_cfg.OUTPUT_FOLDER = args.output
    srv_cfg.RELOAD = args.reload or srv_cfg.RELOAD

    print("\n" + "=" * 60)
    print("Starting Icon Resizer API Server")
    print("=" * 60)
    print(f"Listening on:  http://{host}:{args.port}")
    print(f"Output folder: {srv_cfg.OUTPUT_FOLDER}")
    print("=" * 60 + "\n")

    # With reload uvicorn re-imports the app in a child process, which only
    # sees environment variables, not the assignments above.
    uvicorn.run(
        "icon_resizer.api:app",
        host=host,
        port=args.port,
        reload=srv_cfg.RELOAD,
        log_level="info"
    )


if __name__ == "__main__":
    main()
