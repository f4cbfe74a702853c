#!/usr/bin/env python3
"""
Life Expectancy Predictor Streamlit Application Launcher

Starts the Streamlit interface: profile entry, prediction results,
WHO statistics and report export.
"""

import subprocess
import sys
import os

from lifespan.config import get_settings


def check_dependencies():
    """Check that the interface libraries can be imported."""
    missing = []
    for module in ("streamlit", "plotly", "pandas", "requests"):
        try:
            __import__(module)
        except ImportError:
            missing.append(module)

    if missing:
        print(f"❌ Missing dependencies: {', '.join(missing)}")
        print("\n📦 Install the project first:")
        print("pip install -e .")
        return False
    return True


def main():
    """Launch the Streamlit application."""
    port = str(get_settings().streamlit_port)

    print("❤️ Life Expectancy Predictor - Streamlit Application")
    print("=" * 60)

    if not os.path.exists("streamlit_app.py"):
        print("❌ Error: streamlit_app.py not found in current directory")
        print("Please run this script from the project root directory.")
        sys.exit(1)

    if not check_dependencies():
        sys.exit(1)

    print(f"🚀 Starting Streamlit on http://localhost:{port}")
    print("   Use Ctrl+C to stop the application")
    print("=" * 60)

    try:
        subprocess.run([
            sys.executable, "-m", "streamlit", "run", "streamlit_app.py",
            "--server.port", port,
            "--browser.gatherUsageStats", "false"
        ], check=True)
    except KeyboardInterrupt:
        print("\n\n👋 Shutting down Streamlit application...")
    except subprocess.CalledProcessError as e:
        print(f"\n❌ Streamlit exited with status {e.returncode}")
        print(f"Check that port {port} is free, or run directly: streamlit run streamlit_app.py")
        sys.exit(1)


if __name__ == "__main__":
    main()
