"""Helpers and sample documents shared by the editor2md tests."""

import shutil
import tempfile
from pathlib import Path


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def assert_markdown_normalized(markdown: str) -> None:
    """Assert the output guarantees every conversion makes."""
    assert markdown.endswith("\n")
    assert not markdown.endswith("\n\n")
    assert "\n\n\n" not in markdown
    for line in markdown.split("\n"):
        assert line == line.rstrip(), f"trailing whitespace in {line!r}"


# Word-processor export: in-text anchor named _ftnref1, definition anchor named _ftn1
WORD_EXPORT_HTML = """
<p class="MsoNormal">Body text<a href="#_ftn1" name="_ftnref1" title=""><span class="MsoFootnoteReference"><span>[1]</span></span></a> continues.</p>
<div id="ftn1">
<p class="MsoFootnoteText"><a href="#_ftnref1" name="_ftn1" title=""><span class="MsoFootnoteReference"><span>[1]</span></span></a> Word note text.</p>
</div>
"""

WORD_EXPORT_MARKDOWN = "Body text[^1] continues.\n\n[^1]: Word note text.\n"

# markdown-it-footnote output
MARKDOWN_IT_HTML = """
<p>Alpha<sup class="footnote-ref"><a href="#fn1" id="fnref1">[1]</a></sup> and beta<sup class="footnote-ref"><a href="#fn2" id="fnref2">[2]</a></sup>.</p>
<hr class="footnotes-sep">
<section class="footnotes">
<ol class="footnotes-list">
<li id="fn1" class="footnote-item"><p>First note. <a href="#fnref1" class="footnote-backref">&#8617;&#65038;</a></p>
</li>
<li id="fn2" class="footnote-item"><p>Second note. <a href="#fnref2" class="footnote-backref">&#8617;&#65038;</a></p>
</li>
</ol>
</section>
"""

MARKDOWN_IT_MARKDOWN = "Alpha[^1] and beta[^2].\n\n[^1]: First note.\n[^2]: Second note.\n"

# Editor content model: data-list items and a code-block container
EDITOR_HTML = """
<h1>Release notes</h1>
<p>Some <strong>bold</strong> and <em>italic</em> text.</p>
<ol>
<li data-list="bullet">Point</li>
<li data-list="checked">Done</li>
<li data-list="unchecked">Todo</li>
</ol>
<div class="ql-code-block-container" spellcheck="false"><div class="ql-code-block" data-language="python">x = 1</div><div class="ql-code-block" data-language="python">print(x)</div></div>
"""

EDITOR_MARKDOWN = (
    "# Release notes\n"
    "\n"
    "Some **bold** and *italic* text.\n"
    "\n"
    "- Point\n"
    "- [x] Done\n"
    "- [ ] Todo\n"
    "\n"
    "```python\n"
    "x = 1\n"
    "print(x)\n"
    "```\n"
)
