#!/usr/bin/env python3
"""
Development server startup script for Aramiyot
Falls back to the stub generative backend and local board storage when
no API key or AWS credentials are available
"""
import uvicorn
import sys
import os
import boto3
from botocore.exceptions import BotoCoreError, NoCredentialsError

# Add the current directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


def check_env_file():
    """Load .env file if it exists (optional)"""
    env_file = os.path.join(os.path.dirname(__file__), '.env')
    if os.path.exists(env_file):
        print("📄 Loading .env file...")
        try:
            with open(env_file, 'r') as f:
                for line in f:
                    line = line.strip()
                    if line and not line.startswith('#') and '=' in line:
                        key, value = line.split('=', 1)
                        # Only set if not already in environment
                        if key not in os.environ:
                            os.environ[key] = value
            print("   ✅ .env file loaded")
        except OSError as e:
            print(f"   ⚠️  Error loading .env file: {e}")
    print()


def choose_backends():
    """Pick development backends for whatever is not configured"""
    if not (os.getenv("GENAI_API_KEY") or os.getenv("GOOGLE_API_KEY")):
        os.environ.setdefault("GENAI_PROVIDER", "stub")
        print("   ⚠️  No GENAI_API_KEY set, using the stub generative backend")
    else:
        print("   ✅ Generative backend: Google Generative Language API")

    if os.getenv("BOARDS_BACKEND"):
        print(f"   ✅ Boards backend: {os.environ['BOARDS_BACKEND']}")
        return

    try:
        session = boto3.session.Session(region_name=os.getenv("AWS_REGION", "us-west-2"))
        if session.get_credentials() is None:
            raise NoCredentialsError()
        print("   ✅ AWS credentials found, boards stored in DynamoDB")
    except (NoCredentialsError, BotoCoreError):
        os.environ["BOARDS_BACKEND"] = "local"
        print("   ⚠️  AWS credentials not configured, boards stored in local storage")
    print()


def main():
    """Start the development server"""
    print("🚀 Starting Aramiyot Development Server")
    print("=" * 50)

    check_env_file()
    choose_backends()

    from aramiyot.utils.config import get_config

    try:
        config = get_config()
        config.validate_required_config()

        print("✅ Configuration validated successfully")
        print(f"Environment: {config.__class__.__name__}")
        print(f"Debug Mode: {config.DEBUG}")
        print(f"Boards: {config.BOARDS_BACKEND}")
        print(f"Server: http://localhost:8000")
        print("Press Ctrl+C to stop the server")
        print("-" * 50)

        uvicorn.run(
            "aramiyot.main:app",
            host="0.0.0.0",
            port=8000,
            reload=True,
            reload_dirs=["aramiyot"],
            log_level="debug" if config.DEBUG else "info"
        )

    except ValueError as e:
        print(f"❌ Configuration error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n👋 Server stopped by user")


if __name__ == "__main__":
    main()
