#!/usr/bin/env python3
"""
Contact Message Scoring Script

Runs the content heuristics against a message so staff can see why a real
enquiry was rejected, or check a policy change before deploying it.
Honours the same ANTISPAM_* environment overrides as the API.

Usage:
    python score_message.py --message "Hello, do you have places in September?"
    python score_message.py --name "Jo" --email "jo+test@example.com" --message-file enquiry.txt
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from domain.spam import check_content, matched_keywords
from services.config import load_policy


def main() -> int:
    parser = argparse.ArgumentParser(description="Score a contact message with the spam heuristics")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--message", help="Message text")
    source.add_argument("--message-file", type=Path, help="Read the message from a file")
    parser.add_argument("--name", default="", help="Sender name")
    parser.add_argument("--email", default="parent@example.com", help="Sender email")
    args = parser.parse_args()

    message = args.message if args.message is not None else args.message_file.read_text(encoding="utf-8")
    policy = load_policy()
    result = check_content(message, args.name, args.email, policy)

    print("=" * 50)
    print("CONTENT SCORE")
    print("=" * 50)
    print(f"Score:      {result.score} (threshold {policy.spam_threshold})")
    print(f"Verdict:    {'SPAM' if result.is_spam else 'OK'}")
    print(f"Reasons:    {result.reason or '-'}")
    keywords = matched_keywords(message, args.name, policy=policy)
    if keywords:
        print(f"Keywords:   {', '.join(keywords)}")
    print("=" * 50)

    return 1 if result.is_spam else 0


if __name__ == "__main__":
    sys.exit(main())
