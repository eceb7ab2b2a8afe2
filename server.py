#!/usr/bin/env python3
"""
Compatibility entrypoint for local runs.

The application lives under `landora_admin/`.
Use `python3 server.py` or the `landora-admin-server` script.
"""

from landora_admin.main import app, run


if __name__ == "__main__":
    run()
