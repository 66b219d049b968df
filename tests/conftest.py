"""
conftest.py
-----------
Shared pytest fixtures for diagram tests.
"""

import math

import pytest
import numpy as np
import matplotlib
matplotlib.use("Agg")  # headless

from geomdiagrams import R3
from geomdiagrams.backends import MatplotlibBackend, TraceBackend


class Trace3(TraceBackend):
  """Recording backend for diagrams in R3."""
  space = R3


class OtherTrace(TraceBackend):
  """Second R2 backend, for mismatch checks."""


# -----------------------------------------------------------------------------
# Backends
# -----------------------------------------------------------------------------
@pytest.fixture
def trace():
  return TraceBackend()


@pytest.fixture
def trace3():
  return Trace3()


@pytest.fixture
def mpl_backend():
  return MatplotlibBackend()


# -----------------------------------------------------------------------------
# Sample directions
# -----------------------------------------------------------------------------
@pytest.fixture(scope="session")
def unit_directions():
  """24 unit directions evenly spread around the circle."""
  angles = np.linspace(0.0, 2.0 * math.pi, 24, endpoint=False)
  return np.column_stack([np.cos(angles), np.sin(angles)])


@pytest.fixture(scope="session")
def directions():
  """Non-unit directions of assorted lengths (including a few short ones)."""
  rng = np.random.default_rng(20240611)
  dirs = rng.normal(size=(40, 2)) * rng.uniform(0.1, 5.0, size=(40, 1))
  return dirs


@pytest.fixture(scope="session")
def directions3():
  rng = np.random.default_rng(7)
  return rng.normal(size=(30, 3))


@pytest.fixture
def other_trace():
  return OtherTrace()


# -----------------------------------------------------------------------------
# Diagram comparison
# -----------------------------------------------------------------------------
def _assert_records_close(r1, r2, atol):
  assert [r[0] for r in r1] == [r[0] for r in r2]
  for a, b in zip(r1, r2):
    np.testing.assert_allclose(a[1], b[1], atol=atol)
    if a[0] == "ellipse":
      np.testing.assert_allclose(a[2], b[2], atol=atol)
    else:
      assert a[2] == b[2]
    assert a[-1] == b[-1]


@pytest.fixture
def assert_equivalent():
  """
  Return a checker comparing two diagrams of a trace-style backend:
  rendered primitive sequences, bounds at sampled directions, and names.
  """
  def check(d1, d2, atol=1e-9):
    assert d1.backend is d2.backend
    backend = d1.backend()
    _assert_records_close(backend.render_diagram([], d1).records,
                          backend.render_diagram([], d2).records, atol)

    dirs = np.random.default_rng(3).normal(size=(32, d1.space.dim))
    np.testing.assert_allclose(d1.bounds.sample(dirs), d2.bounds.sample(dirs), atol=atol)

    assert sorted(d1.names) == sorted(d2.names)
    for name in d1.names:
      np.testing.assert_allclose(d1.names[name], d2.names[name], atol=atol)

  return check
