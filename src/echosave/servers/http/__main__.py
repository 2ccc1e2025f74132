"""
Entry point for the EchoSave HTTP server.

Usage:
    python -m echosave.servers.http
    python -m echosave.servers.http --config echosave.yaml --port 8812
"""

from .server import run

if __name__ == "__main__":
    run()
