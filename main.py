# ==============================================================================
# QUARANTINE SPR EXTRACTOR - MAIN ENTRY POINT
# ==============================================================================
# Script launcher for running from a source checkout without installing.
#
# Usage:
#   python main.py <palette_file> <spr_file>
#   python main.py --help
#   python main.py --check       # Check dependencies and exit
# ==============================================================================

import sys


# ==============================================================================
# DEPENDENCY CHECKS
# ==============================================================================

def check_dependencies():
    """
    Check if required dependencies are installed.

    Returns:
        Tuple of (all_ok, missing_packages)
    """
    missing = []

    for dep in ['numpy']:
        try:
            __import__(dep)
        except ImportError:
            missing.append(dep)

    return (len(missing) == 0, missing)


# ==============================================================================
# MAIN FUNCTION
# ==============================================================================

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv

    all_ok, missing = check_dependencies()

    if '--check' in argv:
        print("Checking dependencies...")
        print(f"  Python: {sys.version}")
        if all_ok:
            print("[OK] All dependencies installed")
        else:
            print(f"[MISSING] {', '.join(missing)}")
        return 0 if all_ok else 1

    if not all_ok:
        print(f"[ERROR] Missing required packages: {', '.join(missing)}", file=sys.stderr)
        print("Install with: pip install -e .", file=sys.stderr)
        return 1

    from quarantine_spr.cli import main as cli_main
    return cli_main(argv)


# ==============================================================================
# SCRIPT ENTRY POINT
# ==============================================================================
if __name__ == "__main__":
    sys.exit(main())
