"""Run the shared conformance vectors under pytest."""

import importlib.util
from pathlib import Path

import pytest
from signet_sdk import canonicalize, sign, verify

RUNNER_PATH = Path(__file__).resolve().parents[2] / "conformance" / "run.py"

_spec = importlib.util.spec_from_file_location("conformance_run", RUNNER_PATH)
runner = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(runner)

VECTORS = runner.load_vectors()


@pytest.mark.parametrize("vector", VECTORS["canonical_fixtures"], ids=lambda v: v["id"])
def test_canonical_fixture(vector):
    params = runner.decode_params(vector["params"])
    assert canonicalize(params) == vector["canonical_output"]


@pytest.mark.parametrize("vector", VECTORS["hmac_fixtures"], ids=lambda v: v["id"])
def test_hmac_fixture(vector):
    params = runner.decode_params(vector["params"])
    assert sign(vector["signing_key"], params) == vector["hmac"]
    verify(vector["hmac"], vector["signing_key"], params)
