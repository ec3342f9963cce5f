#!/usr/bin/env python3
"""
Main entry point for the Channel Video System.

Runs the operator CLI: publish a video, sync the catalog, or serve the API.
"""

import sys
import os

# Add the current directory to Python path to import our modules
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from channel_video_system.main import main

if __name__ == "__main__":
    main()
