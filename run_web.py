#!/usr/bin/env python3
"""
Life Expectancy Predictor Web API Launcher

This script starts the FastAPI application that exposes prediction,
analysis, WHO statistics and report export over HTTP.
"""

import uvicorn
import os
import sys

from lifespan.config import get_settings


def main():
    """Launch the web application."""
    settings = get_settings()

    print("❤️ Life Expectancy Predictor - Web API")
    print("=" * 55)
    print(f"Starting web server on http://{settings.api_host}:{settings.api_port} ...")
    print()

    os.makedirs("temp_files", exist_ok=True)

    try:
        uvicorn.run(
            "web_app:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=True,
            log_level=settings.log_level.lower()
        )
    except KeyboardInterrupt:
        print("\n\n👋 Shutting down web server...")
        print("Thank you for using the Life Expectancy Predictor!")
    except OSError as e:
        print(f"\n❌ Error starting web server: {e}")
        print("\nTroubleshooting:")
        print("1. Make sure all dependencies are installed: pip install -e .")
        print(f"2. Check that port {settings.api_port} is not already in use")
        print("3. Ensure you have write permissions in the current directory")
        sys.exit(1)


if __name__ == "__main__":
    main()
