"""
test_bounds.py
--------------
Unit tests for bounds.py: evaluation, monoid laws, rebasing and transforms.
"""

import math

import numpy as np
import pytest

from geomdiagrams import (
  R2, R3, Bounds, Ellipse, IncompatibleBackend, NonInvertibleTransform,
  Polygon, Transformation, bounds_of,
)


@pytest.fixture
def disc():
  """Bounds of a radius-2 disc centered at the origin."""
  return bounds_of(Ellipse.circle(2.0))


@pytest.fixture
def square_pts():
  return np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


@pytest.fixture
def three_bounds():
  f = bounds_of(Ellipse.circle(1.0, (1.0, 0.0)))
  g = Bounds.from_points(R2, [(-3.0, 0.5), (0.0, 2.0), (0.5, -1.0)])
  h = bounds_of(Ellipse(np.array([0.0, -2.0]), np.array([[3.0, 0.5], [0.0, 0.5]])))
  return f, g, h


# ---------------------------------------------------------------------------
# 1. Evaluation
# ---------------------------------------------------------------------------

def test_disc_reports_radius_for_unit_directions(disc, unit_directions):
  np.testing.assert_allclose(disc.sample(unit_directions), 2.0)


def test_disc_scales_inversely_with_direction_length(disc):
  """The projection coefficient of the boundary shrinks as v grows."""
  assert disc((2.0, 0.0)) == pytest.approx(1.0)
  assert disc((0.0, 0.5)) == pytest.approx(4.0)


def test_zero_direction_is_identity_contribution(disc):
  assert disc((0.0, 0.0)) == 0.0
  assert Bounds.empty(R2)((0.0, 0.0)) == 0.0


def test_empty_is_zero_everywhere(directions):
  e = Bounds.empty(R2)
  assert e.is_empty
  np.testing.assert_array_equal(e.sample(directions), 0.0)


def test_from_points_matches_max_projection(square_pts, directions):
  b = Bounds.from_points(R2, square_pts)
  for v in directions:
    expected = max(p @ v for p in square_pts) / (v @ v)
    assert b(v) == pytest.approx(expected)


def test_from_no_points_is_empty():
  assert Bounds.from_points(R2, []).is_empty


def test_boundary_point(disc):
  np.testing.assert_allclose(disc.boundary((1.0, 0.0)), [2.0, 0.0])
  np.testing.assert_allclose(disc.boundary((0.0, -1.0)), [0.0, -2.0])


def test_short_directions_are_not_degenerate():
  """Only v = 0 is degenerate; a short direction has a large coefficient."""
  unit = bounds_of(Ellipse.circle(1.0))
  assert unit((1e-7, 0.0)) == pytest.approx(1e7)
  assert unit((0.0, -1e-9)) == pytest.approx(1e9)
  rebased = unit.rebase((0.5, 0.0))
  assert rebased((1e-7, 0.0)) == pytest.approx(0.5e7)
  scaled = unit.transform(Transformation.scaling(2.0))
  assert scaled((1e-7, 0.0)) == pytest.approx(2e7)


def test_wrong_direction_dimension_rejected(disc):
  with pytest.raises(IncompatibleBackend):
    disc((1.0, 0.0, 0.0))


# ---------------------------------------------------------------------------
# 2. Monoid laws
# ---------------------------------------------------------------------------

def test_identity_law_exact_for_every_function(three_bounds, directions):
  """Including functions that are negative in some directions."""
  e = Bounds.empty(R2)
  for f in three_bounds:
    shifted = f.rebase((10.0, 10.0))  # negative along (1, 1)
    assert shifted((1.0, 1.0)) < 0
    assert shifted.combine(e) is shifted
    assert e.combine(shifted) is shifted
    np.testing.assert_allclose(shifted.combine(e).sample(directions), shifted.sample(directions))


def test_associativity(three_bounds, directions):
  f, g, h = three_bounds
  left = f.combine(g).combine(h)
  right = f.combine(g.combine(h))
  np.testing.assert_allclose(left.sample(directions), right.sample(directions))


def test_commutativity(three_bounds, directions):
  f, g, _ = three_bounds
  np.testing.assert_allclose(f.combine(g).sample(directions), g.combine(f).sample(directions))


def test_combine_is_pointwise_maximum(three_bounds, directions):
  f, g, h = three_bounds
  combined = Bounds.concat(R2, [f, g, h])
  for v in directions:
    assert combined(v) == pytest.approx(max(f(v), g(v), h(v)))


def test_combine_rejects_other_space(disc):
  with pytest.raises(IncompatibleBackend):
    disc.combine(Bounds.empty(R3))


def test_long_chains_stay_flat():
  """Thousands of combined regions evaluate without deep recursion."""
  parts = [bounds_of(Ellipse.circle(1.0, (float(i), 0.0))) for i in range(3000)]
  total = Bounds.concat(R2, parts)
  assert total((1.0, 0.0)) == pytest.approx(3000.0)
  assert total((-1.0, 0.0)) == pytest.approx(1.0)


# ---------------------------------------------------------------------------
# 3. Rebase and translate
# ---------------------------------------------------------------------------

def test_rebase_at_zero_returns_same_function(disc):
  assert disc.rebase((0.0, 0.0)) is disc


def test_rebase_of_empty_stays_empty():
  assert Bounds.empty(R2).rebase((1.0, 2.0)).is_empty


def test_rebased_disc_along_offset(disc):
  """Disc of radius r rebased at u reports r - |u| along u/|u|."""
  u = np.array([3.0, 4.0])
  rebased = disc.rebase(u)
  v = u / np.linalg.norm(u)
  assert rebased(v) == pytest.approx(2.0 - 5.0)
  assert rebased(-v) == pytest.approx(2.0 + 5.0)


def test_rebase_matches_shifted_points(square_pts, directions):
  u = np.array([0.3, -1.7])
  rebased = Bounds.from_points(R2, square_pts).rebase(u)
  expected = Bounds.from_points(R2, square_pts - u)
  np.testing.assert_allclose(rebased.sample(directions), expected.sample(directions))


def test_rebase_keeps_zero_direction_degenerate(disc):
  assert disc.rebase((1.0, 1.0))((0.0, 0.0)) == 0.0


def test_translate_matches_moved_points(square_pts, directions):
  offset = np.array([-2.0, 5.0])
  moved = Bounds.from_points(R2, square_pts).translate(offset)
  expected = Bounds.from_points(R2, square_pts + offset)
  np.testing.assert_allclose(moved.sample(directions), expected.sample(directions))


# ---------------------------------------------------------------------------
# 4. Transform
# ---------------------------------------------------------------------------

def test_transform_matches_transformed_points(square_pts, directions):
  t = Transformation([[2.0, 0.7], [-0.3, 1.5]], (1.0, -4.0))
  transformed = Bounds.from_points(R2, square_pts).transform(t)
  expected = Bounds.from_points(R2, t.apply_points(square_pts))
  np.testing.assert_allclose(transformed.sample(directions), expected.sample(directions))


def test_transform_disc_into_ellipse(disc, unit_directions):
  t = Transformation.scaling((1.5, 0.5))
  stretched = disc.transform(t)
  expected = bounds_of(Ellipse.circle(2.0).transform(t))
  np.testing.assert_allclose(stretched.sample(unit_directions), expected.sample(unit_directions))
  assert stretched((1.0, 0.0)) == pytest.approx(3.0)
  assert stretched((0.0, 1.0)) == pytest.approx(1.0)


def test_transform_rotation_keeps_disc(disc, unit_directions):
  rotated = disc.transform(Transformation.rotation(math.pi / 5))
  np.testing.assert_allclose(rotated.sample(unit_directions), 2.0)


def test_transform_in_three_dimensions(directions3):
  pts = np.random.default_rng(1).normal(size=(12, 3))
  t = Transformation([[1.0, 2.0, 0.0], [0.0, 1.0, -1.0], [0.5, 0.0, 2.0]], (0.0, 1.0, 2.0))
  transformed = Bounds.from_points(R3, pts).transform(t)
  expected = Bounds.from_points(R3, t.apply_points(pts))
  np.testing.assert_allclose(transformed.sample(directions3), expected.sample(directions3))


def test_singular_transform_rejected(disc):
  flatten = Transformation([[1.0, 0.0], [0.0, 0.0]])
  with pytest.raises(NonInvertibleTransform):
    disc.transform(flatten)
  with pytest.raises(NonInvertibleTransform):
    Bounds.empty(R2).transform(flatten)


def test_transform_space_mismatch(disc):
  with pytest.raises(IncompatibleBackend):
    disc.transform(Transformation.identity(R3))


def test_polygon_bounds_follow_vertices():
  poly = Polygon(np.array([[0.0, 0.0], [4.0, 0.0], [0.0, 3.0]]))
  b = bounds_of(poly)
  assert b((1.0, 0.0)) == pytest.approx(4.0)
  assert b((0.0, 1.0)) == pytest.approx(3.0)
  assert b((-1.0, 0.0)) == pytest.approx(0.0)
