import pytest
from hypothesis import HealthCheck, assume, given, settings, strategies as st

from stache import DictLoader, Engine, Position
from stache.exceptions import ExpectedEndSectionError, TemplateSyntaxError
from stache.parser import Section, Text, parse
from stache.utils import create_null_logger

# Text that never opens a tag
tagless_text = st.text(alphabet=st.characters(exclude_characters="{"))

# Identifiers that survive trimming and contain no tag delimiters
identifier = st.text(
    alphabet=st.characters(categories=["L", "Nd"]) | st.sampled_from("_-."),
    min_size=1,
    max_size=12,
)

contexts = st.dictionaries(
    identifier,
    st.none() | st.booleans() | st.integers() | st.text(max_size=5),
    max_size=4,
)


def _render(source: str, context: dict[str, object]) -> str:
    engine = Engine(DictLoader({"main": source}), logger=create_null_logger())
    return engine.render_to_string("main", context)


@given(source=tagless_text, context=contexts)
@settings(suppress_health_check=[HealthCheck.too_slow])
def test_tagless_text_renders_unchanged(source: str, context: dict[str, object]) -> None:
    assert _render(source, context) == source


@given(source=tagless_text.filter(bool))
def test_tagless_text_is_one_text_node(source: str) -> None:
    assert parse(source) == (Text(source),)


@given(opened=identifier, closed=identifier)
def test_mismatched_close_never_parses(opened: str, closed: str) -> None:
    assume(opened != closed)

    with pytest.raises(ExpectedEndSectionError) as exc_info:
        _ = parse(f"{{{{#{opened}}}}}{{{{/{closed}}}}}")

    assert exc_info.value.name == opened


@given(name=identifier, body=st.text(alphabet=st.characters(exclude_characters="{\r\n")))
def test_same_name_nesting_parses_to_depth_two(name: str, body: str) -> None:
    source = f"{{{{#{name}}}}}{{{{#{name}}}}}{body}{{{{/{name}}}}}{{{{/{name}}}}}"

    (outer,) = parse(source)

    assert isinstance(outer, Section)
    (inner,) = outer.children
    assert isinstance(inner, Section)
    assert inner.name == name
    assert inner.children == ((Text(body),) if body else ())


@given(name=identifier, flag=st.booleans())
@settings(suppress_health_check=[HealthCheck.too_slow])
def test_boolean_flip_swaps_section_and_inverted(name: str, flag: bool) -> None:
    source = f"{{{{#{name}}}}}yes{{{{/{name}}}}}{{{{^{name}}}}}no{{{{/{name}}}}}"

    assert _render(source, {name: flag}) == ("yes" if flag else "no")


@given(lines=st.integers(min_value=0, max_value=5), prefix=st.text(alphabet="ab ", max_size=3))
def test_comment_newlines_advance_error_line(lines: int, prefix: str) -> None:
    comment = "{{! " + "x\n" * lines + "}}"
    source = f"{comment}{prefix}{{{{/stray}}}}"

    with pytest.raises(TemplateSyntaxError) as exc_info:
        _ = parse(source)

    last_line = comment.rsplit("\n", 1)[-1]
    assert exc_info.value.position == Position(lines + 1, len(last_line) + len(prefix) + 1)
