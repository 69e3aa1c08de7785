"""
Contract Deployment Wrapper
Runs scripts/deploy_contract.py, forwarding arguments and exit code
"""

import subprocess
import sys
from pathlib import Path

if __name__ == "__main__":
    print("=" * 70)
    print("MetaTanda Contract Deployment")
    print("=" * 70)
    print()

    # Run deployment script
    result = subprocess.run(
        [sys.executable, "-m", "scripts.deploy_contract", *sys.argv[1:]],
        cwd=Path(__file__).resolve().parent
    )

    sys.exit(result.returncode)
