from ceres_lint.classifier import classify_line, declares_language
from ceres_lint.config import LintConfig
from ceres_lint.models import LineKind, ScanContext, ScanState

CONFIG = LintConfig()


def _inside() -> ScanContext:
    return ScanContext(state=ScanState.INSIDE_BLOCK, block_start_line=4)


def test_open_marker_outside_opens_block():
    assert classify_line("[code]", ScanContext(), CONFIG) is LineKind.OPEN_BLOCK
    assert classify_line("[code php]", ScanContext(), CONFIG) is LineKind.OPEN_BLOCK


def test_open_marker_must_start_at_column_zero():
    assert classify_line(" [code]", ScanContext(), CONFIG) is LineKind.OUTSIDE


def test_markers_are_case_sensitive():
    assert classify_line("[CODE]", ScanContext(), CONFIG) is LineKind.OUTSIDE
    assert classify_line("[/CODE]", _inside(), CONFIG) is LineKind.INSIDE


def test_close_marker_inside_closes_block():
    assert classify_line("[/code]", _inside(), CONFIG) is LineKind.CLOSE_BLOCK


def test_plain_lines_follow_state():
    assert classify_line("Some prose.", ScanContext(), CONFIG) is LineKind.OUTSIDE
    assert classify_line("echo $x;", _inside(), CONFIG) is LineKind.INSIDE


def test_stray_close_marker_outside_is_prose():
    assert classify_line("[/code]", ScanContext(), CONFIG) is LineKind.OUTSIDE


def test_nested_open_marker_inside_is_content():
    assert classify_line("[code php]", _inside(), CONFIG) is LineKind.INSIDE


def test_identical_open_and_close_tokens():
    config = LintConfig(open_marker="```", close_marker="```")

    assert classify_line("```php", ScanContext(), config) is LineKind.OPEN_BLOCK
    assert classify_line("```", _inside(), config) is LineKind.CLOSE_BLOCK


def test_classify_does_not_modify_context():
    ctx = _inside()

    classify_line("[/code]", ctx, CONFIG)

    assert ctx.state is ScanState.INSIDE_BLOCK
    assert ctx.block_start_line == 4


def test_declares_language():
    assert declares_language("[code php]", CONFIG) is True
    assert declares_language("[code lang=php title=x]", CONFIG) is True
    assert declares_language("[code]", CONFIG) is False
    assert declares_language("[code js]", CONFIG) is False
