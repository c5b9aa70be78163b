#!/usr/bin/env python3
"""
Simple script to run the structured-data API locally.

For local development: python run_api.py
The package must be importable (pip install -e .), or src/ is added to the
path below so the script also works from a plain checkout.
"""

import os
import sys
from pathlib import Path
import uvicorn

_src_path = Path(__file__).parent / "src"
if _src_path.exists():
    src_path_str = str(_src_path.resolve())

    # Uvicorn with reload=True spawns subprocesses that need PYTHONPATH
    current_pythonpath = os.environ.get("PYTHONPATH", "")
    if current_pythonpath:
        if src_path_str not in current_pythonpath.split(os.pathsep):
            os.environ["PYTHONPATH"] = os.pathsep.join([src_path_str, current_pythonpath])
    else:
        os.environ["PYTHONPATH"] = src_path_str

    if src_path_str not in sys.path:
        sys.path.insert(0, src_path_str)

if __name__ == "__main__":
    uvicorn.run(
        "seo_schema.api.main:app",
        host=os.getenv("HOST", "127.0.0.1"),  # Default to localhost for security
        port=int(os.getenv("PORT", "8000")),
        reload=True,  # Auto-reload on code changes
        log_level="info"
    )
