"""
Health Check Script.
Verifies configuration, the ckpool log directory, and the difficulty
formatter without spinning up the API or UI.
"""

import sys
import os
from colorama import init, Fore, Style

# Add root to python path
PROJ_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJ_ROOT)

init(autoreset=True)

def check_step(name: str):
    print(f"{Fore.CYAN}➤ Checking: {name}...{Style.RESET_ALL}", end=" ")

def step_ok(msg: str = "OK"):
    print(f"{Fore.GREEN}✓ {msg}")

def step_fail(msg: str):
    print(f"{Fore.RED}✗ FAILED: {msg}")
    sys.exit(1)

def main():
    print(f"{Style.BRIGHT}Running maxhash Dashboard Health Check...{Style.RESET_ALL}\n")

    # 1. Settings
    check_step("Configuration")
    try:
        from config import validate_settings, CKPOOL_LOG_DIR
        validate_settings()
        step_ok()
    except ValueError as e:
        step_fail(str(e))

    # 2. Log directory
    check_step("ckpool Log Directory")
    if os.path.isdir(CKPOOL_LOG_DIR) and os.access(CKPOOL_LOG_DIR, os.R_OK):
        step_ok(CKPOOL_LOG_DIR)
    else:
        step_fail(f"{CKPOOL_LOG_DIR} is missing or not readable")

    # 3. Formatter sanity
    check_step("Difficulty Formatter")
    from src.formatting import format_difficulty
    expected = {
        float("nan"): "Invalid",
        999: "999",
        2_000_000: "2M",
        10**15: "1P",
    }
    for value, want in expected.items():
        got = format_difficulty(value)
        if got != want:
            step_fail(f"format_difficulty({value!r}) = {got!r}, want {want!r}")
    step_ok()

    # 4. Pool stats read
    check_step("Pool Stats")
    from src.stats import StatsService, StatsReadError, pool_display
    try:
        stats = StatsService(CKPOOL_LOG_DIR).pool_stats()
        shown = pool_display(stats)
        step_ok(f"{stats.users} users, {stats.workers} workers, diff {shown['diff']}")
    except StatsReadError as e:
        step_fail(str(e))

    print(f"\n{Fore.GREEN}{Style.BRIGHT}ALL CHECKS PASSED.{Style.RESET_ALL}")

if __name__ == "__main__":
    main()
