import pytest

from blahaj_bot.code_expansion import (
    CodeReference,
    expand_code_links,
    find_code_references,
    format_code_block,
    remove_query_string,
    select_lines,
)

GITHUB_LINK = "https://github.com/owner/repo/blob/main/src/lib.rs#L2-L3"


def test_find_github_reference():
    refs = find_code_references(f"see {GITHUB_LINK} please")
    assert refs == [CodeReference("github.com", "owner/repo", "main", "src/lib.rs", 2, 3)]


def test_single_line_reference_ends_at_start():
    refs = find_code_references("https://github.com/owner/repo/blob/main/a.py#L7")
    assert len(refs) == 1
    assert refs[0].start == refs[0].end == 7


def test_codeberg_reference():
    refs = find_code_references("https://codeberg.org/owner/repo/src/branch/dev/x/y.nix#L1~5")
    assert [(r.host, r.repo, r.reference, r.file, r.start, r.end) for r in refs] == [
        ("codeberg.org", "owner/repo", "dev", "x/y.nix", 1, 5)
    ]


def test_no_reference_without_line_anchor():
    assert find_code_references("https://github.com/owner/repo/blob/main/a.py") == []


def test_github_raw_url():
    ref = CodeReference("github.com", "owner/repo", "main", "src/lib.rs", 1, 1)
    assert ref.raw_url() == "https://raw.githubusercontent.com/owner/repo/main/src/lib.rs"


def test_other_host_uses_branch_or_commit():
    sha = "a" * 40
    branch = CodeReference("codeberg.org", "o/r", "dev", "f.py", 1, 1).raw_url()
    commit = CodeReference("codeberg.org", "o/r", sha, "f.py", 1, 1).raw_url()
    assert branch.endswith("/o/r/raw/branch/dev/f.py")
    assert commit.endswith(f"/o/r/raw/commit/{sha}/f.py")


def test_language_from_extension():
    assert CodeReference("github.com", "o/r", "m", "src/Lib.RS?raw=1", 1, 1).language() == "rs"
    assert CodeReference("github.com", "o/r", "m", "Makefile", 1, 1).language() == "makefile"


def test_remove_query_string():
    assert remove_query_string("py?x=1?y") == "py"
    assert remove_query_string("py") == "py"


def test_select_lines_range():
    assert select_lines("a\nb\nc\nd", 2, 3) == "b\nc"


def test_select_lines_handles_crlf_and_trailing_newline():
    assert select_lines("a\r\nb\r\n", 1, 5) == "a\nb"


def test_select_lines_rejects_bad_ranges():
    with pytest.raises(ValueError):
        select_lines("a", 0, 1)
    with pytest.raises(ValueError):
        select_lines("a\nb", 2, 1)


def test_format_short_block():
    assert format_code_block("py", "x = 1") == "```py\nx = 1\n```"


def test_format_long_block_is_marked():
    content = "x" * 2000
    block = format_code_block("txt", content)
    assert block.endswith("\n```\n... (lines not displayed)")
    assert block.startswith("```txt\n")


def test_expand_code_links_uses_fetch():
    seen = []

    def fetch(url):
        seen.append(url)
        return "one\ntwo\nthree\nfour\n"

    blocks = expand_code_links(GITHUB_LINK, fetch)
    assert seen == [CodeReference("github.com", "owner/repo", "main", "src/lib.rs", 2, 3).raw_url()]
    assert blocks == [format_code_block("rs", "two\nthree")]


def test_expand_code_links_skips_failures():
    def fetch(url):
        raise OSError("boom")

    assert expand_code_links(GITHUB_LINK, fetch) == []