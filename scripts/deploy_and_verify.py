#!/usr/bin/env python3
"""
Deploy the configured contract and verify it on the block explorer.

Usage:
    source .env && python3 scripts/deploy_and_verify.py
"""
import sys

from contract_deployer.cli import main

if __name__ == "__main__":
    sys.exit(main())
