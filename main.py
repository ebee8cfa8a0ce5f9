"""
2Chat Chat Checker - Web Server Entry Point
===========================================

Run this to start the API and web UI:
    python main.py

Then open http://127.0.0.1:3000 in your browser.

To use the command line instead:
    python run_cli.py
"""

import uvicorn

from chat_checker.infrastructure.config import get_settings


def main():
    """Start the web server."""
    settings = get_settings()
    server = settings.server

    print("\n" + "=" * 50)
    print("   2Chat Chat Checker")
    print("=" * 50)
    for issue in settings.validate():
        print(f"   {issue}")
    print(f"\n   Web UI:        http://{server.host}:{server.port}")
    print(f"   API index:     http://{server.host}:{server.port}/api")
    print(f"   Health check:  http://{server.host}:{server.port}/health")
    print("   Press Ctrl+C to stop\n")

    uvicorn.run(
        "chat_checker.web.app:app",
        host=server.host,
        port=server.port,
        reload=server.reload,
        log_level="info"
    )


if __name__ == "__main__":
    main()
