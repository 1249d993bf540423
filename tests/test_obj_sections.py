import io

import numpy as np
import pytest

from nurbsobj.errors import CorruptDataError, MissingSectionError, ObjParseError
from nurbsobj.io.build import build_curve, build_surface
from nurbsobj.io.records import iter_records
from nurbsobj.io.sections import CURVE, SURFACE, SectionAccumulator, accumulate


def _acc(kind, text):
    return accumulate(kind, iter_records(io.StringIO(text)))


CURVE_TEXT = """\
v 0 0 0 1
v 1 1 0 0.5
v 2 0 0 2
v 3 1 0 1
cstype rat bspline
deg 2
curv 0 1 1 2 3 4
parm u 0 0 0 0.5 1 1 1
end
"""


def test_vertex_defaults_for_missing_fields():
    acc = SectionAccumulator(CURVE).consume(iter_records(io.StringIO("v 1\nv 1 2 3 0.25 9\n")))
    assert acc.points == [[1.0, 0.0, 0.0], [1.0, 2.0, 3.0]]
    assert acc.point_weights == [1.0, 0.25]


def test_cstype_variants():
    acc = SectionAccumulator(CURVE)
    acc.consume(iter_records(io.StringIO("cstype rat bspline\n")))
    assert acc.rational
    assert 'cstype' in acc.seen

    acc = SectionAccumulator(CURVE)
    acc.consume(iter_records(io.StringIO("cstype bezier\n")))
    assert not acc.rational
    assert 'cstype' not in acc.seen


def test_curve_fields_accumulate():
    acc = _acc(CURVE, CURVE_TEXT)
    assert acc.rational
    assert acc.degrees == [2]
    assert not hasattr(acc, "domain")
    assert acc.indices == [1, 2, 3, 4]
    assert acc.knots['u'] == [0.0, 0.0, 0.0, 0.5, 1.0, 1.0, 1.0]


def test_surface_needs_two_degrees():
    text = "cstype bspline\ndeg 2\n"
    with pytest.raises(ObjParseError) as excinfo:
        _acc(SURFACE, text)
    assert excinfo.value.code == 'E102'
    assert 'deg' in str(excinfo.value)


def test_malformed_number_names_record_and_line():
    text = "v 0 0 0\ncstype bspline\ndeg 1\ncurv 0 1 1 x\n"
    with pytest.raises(ObjParseError) as excinfo:
        _acc(CURVE, text)
    err = excinfo.value
    assert err.code == 'E101'
    assert err.diagnostic.location.line == 4
    assert "'x'" in err.diagnostic.message
    assert 'curv' in err.diagnostic.message


def test_index_tokens_must_be_integers():
    with pytest.raises(ObjParseError):
        _acc(CURVE, "cstype bspline\ndeg 1\ncurv 0 1 1.5 2\nparm u 0 0 1 1\n")


@pytest.mark.parametrize('missing', ['cstype', 'deg', 'curv', 'parm'])
def test_missing_curve_section(missing):
    lines = [line for line in CURVE_TEXT.splitlines() if not line.startswith(missing)]
    with pytest.raises(MissingSectionError) as excinfo:
        _acc(CURVE, "\n".join(lines))
    assert excinfo.value.section == missing
    assert f"missing {missing}" in str(excinfo.value)


def test_surface_missing_parm_v():
    text = "cstype bspline\ndeg 1 1\nsurf 0 1 0 1 1 2 3 4\nparm u 0 0 1 1\n"
    with pytest.raises(MissingSectionError) as excinfo:
        _acc(SURFACE, text)
    assert excinfo.value.section == 'parm'
    assert 'parm v' in str(excinfo.value)


def test_build_curve_resolves_indices_in_order():
    text = CURVE_TEXT.replace("curv 0 1 1 2 3 4", "curv 0 1 4 3 2 1")
    curve = build_curve(_acc(CURVE, text))
    np.testing.assert_array_equal(curve.control_points[0], [3.0, 1.0, 0.0])
    np.testing.assert_array_equal(curve.control_points[3], [0.0, 0.0, 0.0])
    np.testing.assert_array_equal(curve.weights, [1.0, 2.0, 0.5, 1.0])


def test_build_curve_rational_override():
    acc = _acc(CURVE, CURVE_TEXT)
    assert build_curve(acc, rational=False).weights is None
    plain = CURVE_TEXT.replace("rat bspline", "bspline")
    forced = build_curve(_acc(CURVE, plain), rational=True)
    np.testing.assert_array_equal(forced.weights, [1.0, 0.5, 2.0, 1.0])


def test_build_curve_reduced_dimension():
    curve = build_curve(_acc(CURVE, CURVE_TEXT), dim=2)
    assert curve.control_points.shape == (4, 2)
    np.testing.assert_array_equal(curve.control_points[1], [1.0, 1.0])


def test_build_curve_index_out_of_range():
    text = CURVE_TEXT.replace("curv 0 1 1 2 3 4", "curv 0 1 1 2 3 5")
    with pytest.raises(CorruptDataError) as excinfo:
        build_curve(_acc(CURVE, text))
    assert excinfo.value.code == 'E301'
    assert '5' in excinfo.value.diagnostic.message


def test_build_curve_zero_index_is_out_of_range():
    text = CURVE_TEXT.replace("curv 0 1 1 2 3 4", "curv 0 1 0 1 2 3")
    with pytest.raises(CorruptDataError):
        build_curve(_acc(CURVE, text))


def test_build_curve_index_count_mismatch():
    text = CURVE_TEXT.replace("curv 0 1 1 2 3 4", "curv 0 1 1 2 3")
    with pytest.raises(CorruptDataError) as excinfo:
        build_curve(_acc(CURVE, text))
    assert excinfo.value.code == 'E302'


def test_build_curve_knot_vector_too_short():
    text = CURVE_TEXT.replace("parm u 0 0 0 0.5 1 1 1", "parm u 0 1")
    with pytest.raises(CorruptDataError) as excinfo:
        build_curve(_acc(CURVE, text))
    assert excinfo.value.code == 'E303'


def test_build_surface_grid_order_u_fastest():
    verts = "".join(f"v {k} {10 * k} 0\n" for k in range(1, 7))
    text = verts + (
        "cstype bspline\n"
        "deg 1 2\n"
        "surf 0 1 0 1 1 2 3 4 5 6\n"
        "parm u 0 0 1 1\n"
        "parm v 0 0 0 1 1 1\n"
    )
    surface = build_surface(_acc(SURFACE, text))
    grid = surface.control_points
    assert (grid.rows(), grid.cols()) == (2, 3)
    expected = {(0, 0): 1, (1, 0): 2, (0, 1): 3, (1, 1): 4, (0, 2): 5, (1, 2): 6}
    for (i, j), k in expected.items():
        np.testing.assert_array_equal(grid[i, j], [k, 10 * k, 0])
    assert surface.weights is None


def test_build_surface_count_mismatch():
    text = (
        "v 0 0 0\nv 1 0 0\nv 0 1 0\n"
        "cstype bspline\ndeg 1 1\n"
        "surf 0 1 0 1 1 2 3\n"
        "parm u 0 0 1 1\nparm v 0 0 1 1\n"
    )
    with pytest.raises(CorruptDataError) as excinfo:
        build_surface(_acc(SURFACE, text))
    assert '2x2' in excinfo.value.diagnostic.message


def test_domain_bounds_still_validated():
    text = CURVE_TEXT.replace("curv 0 1 1 2 3 4", "curv 0 oops 1 2 3 4")
    with pytest.raises(ObjParseError) as excinfo:
        _acc(CURVE, text)
    assert "'oops'" in excinfo.value.diagnostic.message


def test_curve_ignores_parm_for_other_axes():
    text = CURVE_TEXT.replace("end\n", "") + "parm v not numbers\n"
    acc = _acc(CURVE, text)
    assert acc.knots == {'u': [0.0, 0.0, 0.0, 0.5, 1.0, 1.0, 1.0]}
    assert build_curve(acc).knots == acc.knots['u']
