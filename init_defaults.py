#!/usr/bin/env python3
"""
Script to give the required onboarding pages a starting component

Safe to run repeatedly: pages that already have a config are left alone.
"""

import sys

from boardz import actions, config
from boardz.errors import UpstreamError
from boardz.log import setup_logging
from boardz.services import build_services


def main() -> int:
    logger = setup_logging('boardz-init-defaults', log_level=config.LOG_LEVEL, environment=config.APP_ENV)

    print('Initializing default page configs...')
    print()

    try:
        services = build_services(logger=logger)
    except UpstreamError as e:
        print(f"   ❌ Error: {e.message}")
        return 1

    result = actions.initialize_defaults(services)
    if not result['success']:
        print(f"   ❌ Error: {result['error']}")
        return 1

    initialized = result['data']['initialized']
    if initialized:
        print(f"   ✅ Pages initialized: {', '.join(str(page) for page in initialized)}")
    else:
        print('   ℹ️  Every required page already has components')
    print()

    print('Done!')
    return 0


if __name__ == '__main__':
    sys.exit(main())
