#!/usr/bin/env python3
"""
Correspondent Banking Capabilities Entry Point

Runs the console demo against a capabilities JSON file.
Usage: python run.py [path/to/capabilities.json]
"""

import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from correspondent_banking.demo import main


if __name__ == "__main__":
    print("🏦 Correspondent Bank Capabilities")
    print("💱 Currency, same-day and bearer charge matching")
    print()

    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n👋 Interrupted")
    except Exception as e:
        print(f"❌ Error running demo: {e}")
        sys.exit(1)
