#!/usr/bin/env python3
"""
Signet Conformance Test Suite (Python)
Tests canonical parameter strings and HMAC-SHA1 signatures against shared vectors
"""

import json
import sys
from datetime import datetime
from pathlib import Path

# Import from SDK
sys.path.insert(0, str(Path(__file__).parent.parent / 'sdk-py'))
from signet_sdk.canonical import Param, canonicalize
from signet_sdk.crypto import sign

VECTORS_PATH = Path(__file__).parent / 'vectors.json'


def decode_param(value):
    """JSON has no instants or symbols; fixtures tag them as objects."""
    if isinstance(value, dict):
        if '$instant' in value:
            return Param.instant(datetime.fromisoformat(value['$instant']))
        if '$symbol' in value:
            return Param.symbol(value['$symbol'])
    return value


def decode_params(values):
    return [decode_param(v) for v in values]


def load_vectors(path=VECTORS_PATH):
    with open(path, encoding='utf-8') as f:
        return json.load(f)


def run_suite(name, fixtures, compute, expected_field):
    print(f'[conformance] Testing {name}...')
    suite_pass = 0
    suite_fail = 0

    for v in fixtures:
        try:
            result = compute(v)
            if result == v[expected_field]:
                suite_pass += 1
            else:
                suite_fail += 1
                print(f"  [FAIL] {name}-{v['id']}: expected={v[expected_field]!r}, got={result!r}", file=sys.stderr)
        except Exception as err:
            suite_fail += 1
            print(f"  [FAIL] {name}-{v['id']}: {err}", file=sys.stderr)

    print(f'[conformance] {name}: {suite_pass}/{suite_pass + suite_fail} PASS')
    return suite_pass, suite_fail


def main():
    vectors = load_vectors()

    passed = 0
    failed = 0

    p, f = run_suite(
        'canonical',
        vectors.get('canonical_fixtures', []),
        lambda v: canonicalize(decode_params(v['params'])),
        'canonical_output',
    )
    passed += p
    failed += f

    p, f = run_suite(
        'hmac_sha1',
        vectors.get('hmac_fixtures', []),
        lambda v: sign(v['signing_key'], decode_params(v['params'])),
        'hmac',
    )
    passed += p
    failed += f

    # Final result
    print('')
    if failed == 0:
        print(f'CONFORMANCE: PASS ({passed} vectors)')
        sys.exit(0)
    else:
        print('CONFORMANCE: FAIL')
        sys.exit(1)


if __name__ == '__main__':
    main()
