"""Tests for body, naming, asset, front matter and link transforms."""

import pytest

from logseq_export.core.models import ExportError
from logseq_export.transforms.assets import rewrite_asset_references
from logseq_export.transforms.body import (
    BODY_REWRITE_STEPS,
    compose,
    deindent_deep_bullets,
    drop_empty_bullets,
    promote_second_level_bullets,
    promote_top_level_bullets,
    rewrite_body,
    unindent_multiline_blocks,
)
from logseq_export.transforms.frontmatter import format_list, quote, render
from logseq_export.transforms.links import absolute_link, detect_page_links, relative_link
from logseq_export.transforms.naming import ensure_slug, ensure_title, generate_file_name, sanitize_name


class TestBodySteps:
    """Tests for the individual body rewrite steps."""

    def test_drop_empty_bullets(self):
        assert drop_empty_bullets("-\n\t- \n\t\t-") == "\n\n"

    def test_drop_empty_bullets_keeps_text(self):
        assert drop_empty_bullets("- a\n-\n- b") == "- a\n\n- b"

    def test_unindent_multiline_block(self):
        body = "- multiple\n  lines\n  in\n  one"
        assert unindent_multiline_blocks(body) == "\nmultiple\nlines\nin\none"

    def test_unindent_keeps_deeper_indent(self):
        body = "- ~~~py\n  if x:\n      pass\n  ~~~"
        assert unindent_multiline_blocks(body) == "\n~~~py\nif x:\n    pass\n~~~"

    def test_unindent_keeps_empty_lines_inside_block(self):
        body = "- ~~~\n  x\n\n  y\n  ~~~\n"
        assert unindent_multiline_blocks(body) == "\n~~~\nx\n\ny\n~~~\n"

    def test_unindent_stops_at_trailing_empty_line(self):
        body = "- a\n  b\n\n- c"
        assert unindent_multiline_blocks(body) == "\na\nb\n\n- c"

    def test_unindent_ignores_single_line_bullets(self):
        assert unindent_multiline_blocks("- a\n- b") == "- a\n- b"

    def test_promote_top_level(self):
        assert promote_top_level_bullets("- a\n- b\n") == "\na\n\nb\n"

    def test_promote_top_level_ignores_nested(self):
        assert promote_top_level_bullets("\t- a") == "\t- a"

    def test_promote_second_level(self):
        assert promote_second_level_bullets("\t- hello\n\t- world") == "\n- hello\n\n- world"

    def test_deindent_deep_bullets(self):
        assert deindent_deep_bullets("\t\t- a\n\t\t\t- b\n") == "\t- a\n\t\t- b\n"

    def test_deindent_leaves_second_level(self):
        assert deindent_deep_bullets("\t- a") == "\t- a"

    def test_compose_applies_in_order(self):
        transform = compose(lambda s: s + "a", lambda s: s + "b")
        assert transform("") == "ab"

    def test_step_order(self):
        assert BODY_REWRITE_STEPS == (
            drop_empty_bullets,
            unindent_multiline_blocks,
            promote_top_level_bullets,
            promote_second_level_bullets,
            deindent_deep_bullets,
        )


class TestRewriteBody:
    """Tests for the full body rewrite."""

    def test_single_bullet(self):
        assert rewrite_body("- a\n") == "\na\n"

    def test_removes_empty_bullets(self):
        assert rewrite_body("-\n\t- \n\t\t-") == "\n\n"

    def test_removes_dashes_from_text(self):
        assert rewrite_body("-\n- hello") == "\n\nhello"

    def test_second_level_becomes_first_level(self):
        # the doubled blank line before promoted bullets is expected
        assert rewrite_body("\t- hello\n\t- world") == "\n- hello\n\n- world"

    def test_deep_bullets_lose_one_tab(self):
        assert rewrite_body("\t\t- a\n\t\t\t- b\n") == "\t- a\n\t\t- b\n"

    def test_multiline_blocks(self):
        body = (
            '- ~~~ts\n'
            '  const hello = "world";\n'
            '  ~~~\n'
            '- single line\n'
            '- multiple\n'
            '  lines\n'
            '  in\n'
            '  one'
        )
        assert rewrite_body(body) == (
            '\n~~~ts\n'
            'const hello = "world";\n'
            '~~~\n'
            '\n'
            'single line\n'
            '\n'
            'multiple\n'
            'lines\n'
            'in\n'
            'one'
        )

    def test_mixed_levels(self):
        body = "- intro\n\t- point\n\t\t- detail\n"
        assert rewrite_body(body) == "\nintro\n\n- point\n\t- detail\n"

    def test_empty_body(self):
        assert rewrite_body("") == ""


class TestNaming:
    """Tests for file name, slug and title derivation."""

    def test_sanitize_name(self):
        result = sanitize_name("Blog idea%3A All good laws that EU brought.md")
        assert result == "Blog-idea%3A-All-good-laws-that-EU-brought.md"

    def test_file_name_without_slug(self):
        assert generate_file_name("/graph/pages/name with space.md", {}) == "name-with-space.md"

    def test_file_name_keeps_other_characters(self):
        assert generate_file_name("Blog idea: hello.md", {}) == "Blog-idea:-hello.md"

    def test_file_name_from_slug_and_date(self):
        attributes = {"slug": "my-post", "date": "2023-07-29"}
        assert generate_file_name("x.md", attributes) == "2023-07-29-my-post.md"

    def test_file_name_from_slug(self):
        assert generate_file_name("x.md", {"slug": "slug-name"}) == "slug-name.md"

    def test_date_without_slug_is_ignored(self):
        assert generate_file_name("a b.md", {"date": "2023-07-29"}) == "a-b.md"

    def test_folder_attribute(self):
        attributes = {"folder": "content/posts"}
        assert generate_file_name("name with space.md", attributes) == "content/posts/name-with-space.md"

    def test_folder_with_slug(self):
        attributes = {"folder": "/posts/", "slug": "hello"}
        assert generate_file_name("x.md", attributes) == "posts/hello.md"

    @pytest.mark.parametrize("slug", ["../../etc/evil", "a/b", "a\\b", "..", "."])
    def test_slug_with_path_separators_raises(self, slug):
        with pytest.raises(ExportError):
            generate_file_name("x.md", {"slug": slug})

    def test_date_with_path_separators_raises(self):
        with pytest.raises(ExportError):
            generate_file_name("x.md", {"slug": "post", "date": "2023/07/29"})

    def test_folder_leaving_pages_folder_raises(self):
        with pytest.raises(ExportError):
            generate_file_name("x.md", {"folder": "posts/../../.."})

    def test_empty_path_without_slug_raises(self):
        with pytest.raises(ExportError):
            generate_file_name("", {})

    def test_ensure_slug_from_file_name(self):
        attributes = {}
        ensure_slug(attributes, "name-with-space.md")
        assert attributes["slug"] == "name-with-space"

    def test_ensure_slug_ignores_folder(self):
        attributes = {}
        ensure_slug(attributes, "content/posts/name.md")
        assert attributes["slug"] == "name"

    def test_ensure_slug_keeps_existing(self):
        attributes = {"slug": "slug-name"}
        ensure_slug(attributes, "2023-07-29-slug-name.md")
        assert attributes["slug"] == "slug-name"

    def test_ensure_title_from_file_name(self):
        attributes = {}
        ensure_title(attributes, "/name with space.md")
        assert attributes["title"] == "name with space"

    def test_ensure_title_keeps_existing(self):
        attributes = {"title": "title from page prop"}
        ensure_title(attributes, "/name with space.md")
        assert attributes["title"] == "title from page prop"

    def test_ensure_title_keeps_percent_encoding(self):
        attributes = {}
        ensure_title(attributes, "/Blog idea%3A hello.md")
        assert attributes["title"] == "Blog idea%3A hello"

    def test_ensure_title_decodes_when_asked(self):
        attributes = {}
        ensure_title(attributes, "/Blog idea%3A hello.md", decode=True)
        assert attributes["title"] == "Blog idea: hello"


class TestAssetRewrite:
    """Tests for rewrite_asset_references."""

    def test_rewrites_relative_image(self):
        body, assets, attributes = rewrite_asset_references(
            "- ![img](../assets/p.png)", {}, "/images"
        )
        assert body == "- ![img](/images/p.png)"
        assert assets == ["../assets/p.png"]
        assert attributes == {}

    def test_leaves_absolute_images(self):
        body = "![a](https://example.com/p.png) ![b](/static/q.png)"
        new_body, assets, _ = rewrite_asset_references(body, {}, "/images")
        assert new_body == body
        assert assets == []

    def test_keeps_duplicates(self):
        body = "![a](../assets/p.png)\n![b](./p.png)"
        new_body, assets, _ = rewrite_asset_references(body, {}, "/images/")
        assert new_body == "![a](/images/p.png)\n![b](/images/p.png)"
        assert assets == ["../assets/p.png", "./p.png"]

    def test_rewrites_image_attribute(self):
        attributes = {"image": "../assets/cover.jpg", "title": "T"}
        _, assets, new_attributes = rewrite_asset_references("", attributes, "/images")
        assert new_attributes["image"] == "/images/cover.jpg"
        assert new_attributes["title"] == "T"
        assert assets == ["../assets/cover.jpg"]
        # input mapping is not modified
        assert attributes["image"] == "../assets/cover.jpg"

    def test_body_assets_come_before_image_attribute(self):
        attributes = {"image": "../assets/cover.jpg"}
        _, assets, _ = rewrite_asset_references("![x](../assets/a.png)", attributes, "/i")
        assert assets == ["../assets/a.png", "../assets/cover.jpg"]

    def test_leaves_external_image_attribute(self):
        attributes = {"image": "https://example.com/cover.jpg"}
        _, assets, new_attributes = rewrite_asset_references("", attributes, "/images")
        assert new_attributes["image"] == "https://example.com/cover.jpg"
        assert assets == []


class TestFrontmatter:
    """Tests for front matter rendering."""

    def test_renders_quoted_strings(self):
        result = render({"first": "1", "second": "2"}, "page text")
        assert result == '---\nfirst: "1"\nsecond: "2"\n---\npage text'

    def test_renders_in_alphabetical_order(self):
        attributes = {"e": "1", "d": "1", "c": "1", "b": "1", "a": "1"}
        result = render(attributes, "page text")
        assert result == '---\na: "1"\nb: "1"\nc: "1"\nd: "1"\ne: "1"\n---\npage text'

    def test_renders_unquoted(self):
        result = render({"first": "1", "second": "2"}, "page text", unquoted=["first", "second"])
        assert result == "---\nfirst: 1\nsecond: 2\n---\npage text"

    def test_renders_lists(self):
        result = render({"tags": "x, y"}, "", list_fields={"tags"})
        assert result == '---\ntags: ["x", "y"]\n---\n'

    def test_list_wins_over_unquoted(self):
        result = render({"tags": "x"}, "", unquoted={"tags"}, list_fields={"tags"})
        assert 'tags: ["x"]' in result

    def test_escapes_quotes(self):
        result = render({"title": 'Say "hi"'}, "")
        assert 'title: "Say \\"hi\\""' in result

    def test_body_is_appended_verbatim(self):
        assert render({}, "\ntext\n") == "---\n---\n\ntext\n"

    def test_quote_escapes_backslash(self):
        assert quote("a\\b") == '"a\\\\b"'

    def test_format_empty_list(self):
        assert format_list("") == "[]"


class TestLinkTransforms:
    """Tests for link transform factories."""

    def test_relative_link(self):
        transform = relative_link()
        assert transform("My Note", "my-note") == "[My Note](my-note.md)"

    def test_absolute_link_with_prefix(self):
        transform = absolute_link("/blog/")
        assert transform("My Note", "my-note") == "[My Note](/blog/my-note)"

    def test_absolute_link_without_prefix(self):
        transform = absolute_link()
        assert transform("My Note", "my-note") == "[My Note](/my-note)"

    def test_detect_page_links(self):
        content = (
            "- created: 2021-02-28T11:04:46\n\n"
            "TotT is a funny example of [[Environment design]] where Google decided to promote "
            "testing by pasting one-page documents on [[Automated testing]][^1].\n\n"
            "[^1]: [[Winters, Manshreck, Wright - Software Engineering at Google]] p227\n"
        )
        assert detect_page_links(content) == [
            "Environment design",
            "Automated testing",
            "Winters, Manshreck, Wright - Software Engineering at Google",
        ]

    def test_detect_no_links(self):
        assert detect_page_links("plain [text](url)") == []
