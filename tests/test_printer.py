"""Tests for printer.py -- format-preserving output."""

import copy

import pytest

from php_docblocks.errors import DocblockError
from php_docblocks.models import DocComment, MethodDeclaration
from php_docblocks.parser import parse_source
from php_docblocks.printer import detect_newline, format_comment, print_format_preserving
from php_docblocks.synth import synthesize

SOURCE = b"""<?php

class UserController
{
    // count of things
    private int $count = 0;

    public function show(int $id, ?string $b = null): bool
    {
        return true;   // keep   this spacing
    }

    /** Already documented. */
    public function index()
    {
    }
}
"""

EXPECTED = b"""<?php

class UserController
{
    // count of things
    private int $count = 0;

    /**
     * show function
     *
     * @param int $id
     * @param ?string $b = null
     * @return bool
     */
    public function show(int $id, ?string $b = null): bool
    {
        return true;   // keep   this spacing
    }

    /** Already documented. */
    public function index()
    {
    }
}
"""


def _rewrite(source: bytes) -> bytes:
    parsed = parse_source(source)
    new_methods = copy.deepcopy(parsed.methods)
    synthesize(new_methods)
    return print_format_preserving(new_methods, parsed.methods, source)


class TestDetectNewline:
    def test_lf(self):
        assert detect_newline(b"a\nb\n") == "\n"

    def test_crlf(self):
        assert detect_newline(b"a\r\nb\r\n") == "\r\n"


class TestFormatComment:
    def test_indents_continuation_lines(self):
        assert format_comment("/**\n * x\n */", "    ") == "/**\n     * x\n     */\n    "

    def test_crlf(self):
        assert format_comment("/**\n */", "\t", "\r\n") == "/**\r\n\t */\r\n\t"


class TestPrintFormatPreserving:
    def test_inserts_only_new_comment(self):
        assert _rewrite(SOURCE) == EXPECTED

    def test_second_pass_is_noop(self):
        once = _rewrite(SOURCE)
        assert _rewrite(once) == once

    def test_unchanged_returns_source(self):
        parsed = parse_source(EXPECTED)
        new_methods = copy.deepcopy(parsed.methods)
        assert synthesize(new_methods) == 0
        assert print_format_preserving(new_methods, parsed.methods, EXPECTED) is EXPECTED

    def test_crlf_file_stays_crlf(self):
        source = SOURCE.replace(b"\n", b"\r\n")
        out = _rewrite(source)
        assert out == EXPECTED.replace(b"\n", b"\r\n")

    def test_tab_indented_method(self):
        source = b"<?php\nclass A\n{\n\tpublic function run() {}\n}\n"
        out = _rewrite(source)
        assert out == (
            b"<?php\nclass A\n{\n"
            b"\t/**\n\t * run function\n\t *\n\t * @return void\n\t */\n"
            b"\tpublic function run() {}\n}\n"
        )

    def test_method_sharing_a_line(self):
        source = b"<?php\nclass A { public function run() {} }\n"
        out = _rewrite(source)
        assert out == (
            b"<?php\nclass A { /**\n * run function\n *\n * @return void\n */\n"
            b"public function run() {} }\n"
        )

    def test_multiple_methods_and_nested_class(self):
        source = b"""<?php
class A
{
    public function a() {}
    public function b()
    {
        return new class {
            public function c() {}
        };
    }
}
"""
        out = _rewrite(source)
        assert out.count(b"/**") == 3
        assert b"        /**\n         * a function" not in out
        assert b"    /**\n     * a function" in out
        assert b"            /**\n             * c function" in out
        # Every method now carries exactly one comment
        parsed = parse_source(out)
        assert [len(m.comments) for m in parsed.methods] == [1, 1, 1]

    def test_attributes_stay_below_comment(self):
        source = b"<?php\nclass A\n{\n    #[Route('/')]\n    public function home() {}\n}\n"
        out = _rewrite(source)
        assert b"     */\n    #[Route('/')]\n    public function home() {}" in out

    def test_length_mismatch_raises(self):
        with pytest.raises(DocblockError):
            print_format_preserving([], [MethodDeclaration(name="a")], b"")

    def test_existing_leading_comment_not_reinserted(self):
        comment = DocComment("/** x */")
        old = MethodDeclaration(name="a", leading_comment=comment, start_byte=0)
        new = MethodDeclaration(name="a", leading_comment=comment, start_byte=0)
        assert print_format_preserving([new], [old], b"function") == b"function"
