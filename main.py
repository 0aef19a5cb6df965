"""
Privacy Knowledge Base — CLI Entry Point.

Answers lookups from the terminal, exactly as the HTTP service would:
    definitions term=consent
    gdpr article=30(1)(g)
    dpa country=BE
"""

import json
import logging
import shlex
import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

# --- Path Setup ---
PROJECT_ROOT = Path(__file__).resolve().parent
sys.path.append(str(PROJECT_ROOT))

try:
    from kb.config import settings
    from kb.dispatcher import handle
except ImportError as e:
    print(f"❌ Critical Import Error: {e}")
    print("Ensure you are running from the project root: 'python main.py'")
    sys.exit(1)

# --- Logging ---
logging.basicConfig(level=logging.ERROR)


def parse_command(line: str) -> Tuple[Dict[str, str], Optional[str]]:
    """
    'dpa country=BE lang="fr, en;q=0.5"' → ({'action': 'dpa', 'country': 'BE'}, 'fr, en;q=0.5')

    The optional 'lang' argument plays the role of the Accept-Language header.
    """
    tokens = shlex.split(line)
    if not tokens:
        return {}, None

    params = {"action": tokens[0]}
    for token in tokens[1:]:
        key, sep, value = token.partition("=")
        if sep:
            params[key] = value

    accept_language = params.pop("lang", None)
    return params, accept_language


def run_loop():
    """Main interactive loop."""
    print("\n" + "=" * 50)
    print("🔐  PRIVACY KNOWLEDGE BASE")
    print(f"    Database: {settings.DATABASE_PATH}")
    print("    Type 'q', 'quit' or 'exit' to leave.")
    print("=" * 50 + "\n")

    while True:
        try:
            line = input("❓ Lookup : ").strip()

            if line.lower() in ['q', 'quit', 'exit']:
                print("👋 Bye.")
                break

            if not line:
                continue

            try:
                params, accept_language = parse_command(line)
            except ValueError as e:
                print(f"⚠️  Could not parse the command: {e}")
                continue

            status, payload = handle(params, accept_language)

            if status == 200:
                print(json.dumps(payload, ensure_ascii=False, indent=2))
            else:
                print(f"   ⚠️  {status}")
                print(payload)

            print("-" * 50 + "\n")

        except KeyboardInterrupt:
            print("\n\n👋 Interrupted.")
            break


def main():
    """Application Entry Point."""
    if not settings.DATABASE_PATH.exists():
        print(f"❌ Error: Database not found at {settings.DATABASE_PATH}")
        print("👉 Action required: Run 'python -m kb.ingestion.loader'")
        return

    run_loop()


if __name__ == "__main__":
    main()
