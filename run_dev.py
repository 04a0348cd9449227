#!/usr/bin/env python3
"""
Development server launcher for the SecureFiles gateway

Usage:
    SECUREFILES_BASE_PATH=/mnt/nfs/media python run_dev.py
"""
import sys
import os

# Add current directory to path to allow importing web module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from web.app import create_app
from web.config import DevelopmentConfig


if __name__ == '__main__':
    print("=" * 60)
    print("Secure Files Access - Development Server")
    print("=" * 60)
    print()
    print(f"Media root: {DevelopmentConfig.BASE_PATH or '(not configured)'}")
    print("Files are served at: http://localhost:5000/media/<path>")
    print()
    print("Press CTRL+C to stop the server")
    print("=" * 60)
    print()

    app = create_app(DevelopmentConfig)
    app.run(host='127.0.0.1', port=5000, debug=True)
