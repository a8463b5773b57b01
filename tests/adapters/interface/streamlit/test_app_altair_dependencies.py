"""Tests for the chart dependency check of the Streamlit app."""

import sys
import types

import pytest

from src.adapters.interface.streamlit import app


def test_check_altair_dependencies_ok(monkeypatch) -> None:
    """Return ok when numpy/pandas expose expected attributes."""
    monkeypatch.setitem(
        sys.modules, "numpy", types.SimpleNamespace(ndarray=object)
    )
    monkeypatch.setitem(
        sys.modules, "pandas", types.SimpleNamespace(Timestamp=object)
    )

    assert app._check_altair_dependencies() == (True, None)


@pytest.mark.parametrize(
    ("numpy_attrs", "pandas_attrs", "missing"),
    [
        ({}, {"Timestamp": object}, "numpy"),
        ({"ndarray": object}, {}, "pandas"),
    ],
)
def test_check_altair_dependencies_reports_broken_module(
    monkeypatch, numpy_attrs, pandas_attrs, missing
) -> None:
    """Name the incomplete module so the dashboard can explain it."""
    monkeypatch.setitem(
        sys.modules, "numpy", types.SimpleNamespace(**numpy_attrs)
    )
    monkeypatch.setitem(
        sys.modules, "pandas", types.SimpleNamespace(**pandas_attrs)
    )

    ok, message = app._check_altair_dependencies()

    assert ok is False
    assert missing in message
    assert message.startswith("Charts unavailable")
