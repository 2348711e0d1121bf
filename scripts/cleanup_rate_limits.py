"""
Remove expired contact rate limit records from Supabase.

The API sweeps its own store every hour; run this from cron when the API is
configured with RATE_LIMIT_BACKEND=supabase and you want the table pruned
independently of any running server.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from repositories.rate_limit_repository import SupabaseRateLimitStore
from services.rate_limit_service import RateLimiter


def cleanup_rate_limits() -> int:
    """Delete every rate limit row whose window has passed."""

    removed = RateLimiter(SupabaseRateLimitStore()).cleanup()
    print(f"Removed {removed} expired rate limit record(s)")
    return removed


if __name__ == "__main__":
    cleanup_rate_limits()
