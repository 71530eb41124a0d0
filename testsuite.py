# Copyright (c) 2026, The kconfparse developers
# SPDX-License-Identifier: ISC

# This is the kconfparse test suite. It runs selftests on strings and on the
# Kconfig files in tests/. Run it from anywhere with
#
#   $ python testsuite.py
#
# The exit status is 1 if any test fails. pytest also picks up the suite (see
# setup.cfg), through test_selftests() below.
#
# All tests should pass.

from kconfparse import Parser, KconfigFile, SourceDirective, ConfigBlock, \
                       KconfigSyntaxError, KconfigTokenizationError, \
                       parse, parse_config, parse_expr, expr_str, \
                       SOURCE, RSOURCE, OSOURCE, ORSOURCE, \
                       BOOL, HEX, INT, STRING, TRISTATE, \
                       AND, OR, NOT, EQUAL, UNEQUAL, LESS, LESS_EQUAL, \
                       GREATER, GREATER_EQUAL, IDENT, \
                       TYPE, DEPENDS_ON, HELP, SELECT, DEFAULT, DEF_TYPE, \
                       PROMPT, RANGE, IMPLY, VISIBLE_IF, OPTION, OPTIONAL, \
                       ENV, DEFCONFIG_LIST, MODULES, ALLNOCONFIG_Y
import kconfcheck
import os
import sys

all_passed = True

def fail(msg=None):
    global all_passed
    all_passed = False
    if msg is not None:
        print("fail: " + msg)

def verify(cond, msg):
    if not cond:
        fail(msg)

def verify_equal(x, y):
    if x != y:
        fail("'{}' does not equal '{}'".format(x, y))

def fixture(name):
    """
    Returns the path to the Kconfig file 'name' in tests/.
    """
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "tests",
                        name)

def read_fixture(name):
    with open(fixture(name), "rb") as f:
        return f.read()

def run_tests():
    run_selftests()
    if not all_passed:
        sys.exit(1)

def test_selftests():
    run_selftests()
    assert all_passed, "some selftests failed, see the output above"

def ident(name):
    """
    Shorthand for identifier expressions.
    """
    return (IDENT, name)

def run_selftests():
    #
    # Common helper functions
    #

    # Parser for tests that don't look at warnings
    quiet = Parser(warn=False)

    def verify_error(fn, s, exc_class=KconfigSyntaxError, linenr=None,
                     column=None):
        """
        Verifies that fn(s) raises 'exc_class', optionally at a particular
        location. Returns the exception, or None if none was raised.
        """
        try:
            fn(s)
        except exc_class as e:
            if linenr is not None:
                verify(e.linenr == linenr,
                       "expected the error for {!r} on line {}, got line {}"
                       .format(s, linenr, e.linenr))
            if column is not None:
                verify(e.column == column,
                       "expected the error for {!r} at column {}, got column "
                       "{}".format(s, column, e.column))
            return e
        else:
            fail("expected parsing of {!r} to fail, didn't".format(s))
            return None

    #
    # Selftests
    #

    print("Testing string literal lexing")

    def verify_string_lex(s, res):
        """
        Verifies that 'source s' gives a path equal to 'res'
        """
        path = quiet.parse("source " + s + "\n").blocks[0].path
        verify(path == res,
               "expected <{}> to give the path <{}>, gave <{}>"
               .format(s, res, path))

    verify_string_lex('""', "")
    verify_string_lex('"a"', "a")
    verify_string_lex('"ab c"', "ab c")
    verify_string_lex("\"'\"", "'")
    verify_string_lex("\"'a'\"", "'a'")
    verify_string_lex('"#"', "#")
    verify_string_lex('"a # b"', "a # b")
    verify_string_lex('"\t"', "\t")
    verify_string_lex('"$(SRCARCH)/*/Kconfig"', "$(SRCARCH)/*/Kconfig")
    verify_string_lex('"ÅÄÖ"', "ÅÄÖ")

    def verify_string_bad(s, column):
        """
        Verifies that tokenizing 'source s' raises KconfigTokenizationError at
        'column'
        """
        verify_error(quiet.parse, "source " + s + "\n",
                     KconfigTokenizationError, 1, column)

    verify_string_bad('"', 8)
    verify_string_bad('"foo', 8)
    verify_string_bad("'foo'", 8)
    # Backslashes end the literal without starting an escape
    verify_string_bad(r'"\"', 9)
    verify_string_bad(r'"a\nb"', 10)
    verify_string_bad(r'"\\"', 9)
    verify_string_bad(r'"\x41"', 9)

    e = verify_error(quiet.parse, 'source "no-closing-quote',
                     KconfigTokenizationError, 1, 8)
    if e is not None:
        verify("unterminated" in e.expected,
               "wrong error for an unterminated string: " + str(e))


    print("Testing identifier lexing")

    def verify_ident(s):
        verify_equal(quiet.parse_expr(s), ident(s))

    verify_ident("FOO")
    verify_ident("foo_bar1")
    verify_ident("x")
    verify_ident("FOO_")
    verify_ident("ÅFOO")
    verify_ident("n")
    verify_ident("y")
    # Keyword prefixes don't make keywords
    verify_ident("ifdef")
    verify_ident("configure")
    verify_ident("on_off")
    # Combining marks, connector punctuation, and other XID_Continue
    # characters
    verify_ident("CAFE\N{COMBINING ACUTE ACCENT}")
    verify_ident("a\N{MIDDLE DOT}b")
    verify_ident("a\N{UNDERTIE}b")
    verify_ident("A\N{COMBINING RING ABOVE}\N{COMBINING ACUTE ACCENT}")

    verify_equal(quiet.parse_expr("a\N{MIDDLE DOT}b&&B\N{UNDERTIE}"),
                 (AND, ident("a\N{MIDDLE DOT}b"), ident("B\N{UNDERTIE}")))

    # XID_Continue characters can't start an identifier
    verify_error(quiet.parse_expr, "\N{COMBINING ACUTE ACCENT}FOO",
                 KconfigTokenizationError, 1, 1)
    verify_error(quiet.parse_expr, "\N{MIDDLE DOT}FOO",
                 KconfigTokenizationError, 1, 1)
    verify_error(quiet.parse_expr, "FOO \N{UNDERTIE}",
                 KconfigTokenizationError, 1, 5)

    verify_error(quiet.parse_expr, "64BIT", KconfigTokenizationError, 1, 1)
    verify_error(quiet.parse_expr, "_FOO", KconfigTokenizationError, 1, 1)
    verify_error(quiet.parse_expr, "FOO.BAR", KconfigTokenizationError, 1, 4)
    verify_error(quiet.parse_expr, "FOO-BAR", KconfigTokenizationError, 1, 4)

    # Keywords are never identifiers
    for keyword in "menu", "on", "if", "env", "string", "modules", "source":
        verify_error(quiet.parse_expr, keyword, linenr=1, column=1)


    print("Testing whitespace and comments")

    verify_equal(quiet.parse_expr(" \t FOO \t "), ident("FOO"))
    verify_equal(quiet.parse_expr("FOO # comment"), ident("FOO"))
    verify_equal(quiet.parse_expr("FOO#comment"), ident("FOO"))
    verify_equal(quiet.parse_expr("\n# comment\n\nFOO\n\n"), ident("FOO"))
    verify_equal(quiet.parse_expr("FOO\r\n"), ident("FOO"))

    # Only spaces and tabs are whitespace within lines
    verify_error(quiet.parse_expr, "FOO\fBAR", KconfigTokenizationError, 1, 4)
    verify_error(quiet.parse_expr, "FOO\rBAR", KconfigTokenizationError, 1, 4)
    verify_error(quiet.parse_expr, "FOO\vBAR", KconfigTokenizationError, 1, 4)

    # Expressions don't continue onto the next line
    verify_error(quiet.parse_expr, "FOO &&\nBAR", linenr=1, column=7)
    verify_error(quiet.parse_expr, "FOO\nBAR", linenr=2, column=1)


    print("Testing expression parsing")

    def verify_expr(s, expected):
        res = quiet.parse_expr(s)
        verify(res == expected,
               "expected '{}' to parse as {}, parsed as {}"
               .format(s, expected, res))

    verify_expr("a", ident("a"))
    verify_expr("!a", (NOT, ident("a")))
    verify_expr("a && b", (AND, ident("a"), ident("b")))
    verify_expr("a||b", (OR, ident("a"), ident("b")))
    verify_expr("a = b", (EQUAL, ident("a"), ident("b")))
    verify_expr("a != b", (UNEQUAL, ident("a"), ident("b")))
    verify_expr("a!=b", (UNEQUAL, ident("a"), ident("b")))
    verify_expr("a < b", (LESS, ident("a"), ident("b")))
    verify_expr("a <= b", (LESS_EQUAL, ident("a"), ident("b")))
    verify_expr("a<=b", (LESS_EQUAL, ident("a"), ident("b")))
    verify_expr("a > b", (GREATER, ident("a"), ident("b")))
    verify_expr("a >= b", (GREATER_EQUAL, ident("a"), ident("b")))
    verify_expr("a>=b", (GREATER_EQUAL, ident("a"), ident("b")))
    verify_expr("y = m", (EQUAL, ident("y"), ident("m")))

    verify_expr("a && (b && c)",
                (AND, ident("a"), (AND, ident("b"), ident("c"))))
    verify_expr("(a && b) || c",
                (OR, (AND, ident("a"), ident("b")), ident("c")))
    verify_expr("!a && b", (AND, (NOT, ident("a")), ident("b")))
    verify_expr("a && !b", (AND, ident("a"), (NOT, ident("b"))))
    verify_expr("!a != !b", (UNEQUAL, (NOT, ident("a")), (NOT, ident("b"))))
    verify_expr("!(a || b)", (NOT, (OR, ident("a"), ident("b"))))
    verify_expr("!(!a)", (NOT, (NOT, ident("a"))))
    verify_expr("((a))", ident("a"))
    verify_expr("(a) = (b)", (EQUAL, ident("a"), ident("b")))
    verify_expr("a || (b && (c = d))",
                (OR, ident("a"),
                 (AND, ident("b"), (EQUAL, ident("c"), ident("d")))))

    # Only one binary operator per level
    verify_error(quiet.parse_expr, "a && b && c", linenr=1, column=8)
    verify_error(quiet.parse_expr, "a || b && c", linenr=1, column=8)
    verify_error(quiet.parse_expr, "a = b = c", linenr=1, column=7)
    verify_error(quiet.parse_expr, "(a && b && c)", linenr=1, column=9)

    verify_error(quiet.parse_expr, "", linenr=1, column=1)
    verify_error(quiet.parse_expr, "(a", linenr=1, column=3)
    verify_error(quiet.parse_expr, "(a && b", linenr=1, column=8)
    verify_error(quiet.parse_expr, "a)", linenr=1, column=2)
    verify_error(quiet.parse_expr, "a &&", linenr=1, column=5)
    verify_error(quiet.parse_expr, "&& a", linenr=1, column=1)
    verify_error(quiet.parse_expr, "!!a", linenr=1, column=2)
    verify_error(quiet.parse_expr, "!", linenr=1, column=2)
    verify_error(quiet.parse_expr, "()", linenr=1, column=2)
    verify_error(quiet.parse_expr, "a b", linenr=1, column=3)
    verify_error(quiet.parse_expr, "a == b", linenr=1, column=4)
    verify_error(quiet.parse_expr, '"a"', linenr=1, column=1)
    verify_error(quiet.parse_expr, "a & b", KconfigTokenizationError, 1, 3)
    verify_error(quiet.parse_expr, "a | b", KconfigTokenizationError, 1, 3)

    e = verify_error(quiet.parse_expr, "(a && b")
    if e is not None:
        verify_equal(e.expected, "missing end parenthesis")


    print("Testing expr_str()")

    def verify_expr_str(s, res):
        expr = quiet.parse_expr(s)
        verify_equal(expr_str(expr), res)
        # The result must parse back to the same expression
        verify_equal(quiet.parse_expr(res), expr)

    verify_expr_str("a", "a")
    verify_expr_str("!a", "!a")
    verify_expr_str("a&&b", "a && b")
    verify_expr_str("a||(b&&!c)", "a || (b && !c)")
    verify_expr_str("(a && b) || c", "(a && b) || c")
    verify_expr_str("!(a || b)", "!(a || b)")
    verify_expr_str("!(!a)", "!(!a)")
    verify_expr_str("!a<=b", "!a <= b")
    verify_expr_str("((a)) != (b)", "a != b")
    verify_expr_str("a > (b = (c >= d))", "a > (b = (c >= d))")


    print("Testing 'source' statements")

    p = Parser(warn=False)
    tree = p.parse(read_fixture("Ksource"), fixture("Ksource"))

    verify(isinstance(tree, KconfigFile), "parse() didn't give a KconfigFile")
    verify_equal(tree.filename, fixture("Ksource"))

    expected = (
        (SOURCE,   "Kconfig.foo",                          2),
        (RSOURCE,  "arch/*/Kconfig",                       4),
        (OSOURCE,  "optional/Kconfig",                     5),
        (OSOURCE,  "optional/Kconfig",                     6),
        (ORSOURCE, "drivers/Kconfig",                      7),
        (ORSOURCE, "drivers/Kconfig",                      8),
        (SOURCE,   "$(SRCARCH)/K'config'#not-a-comment",   10),
        (SOURCE,   "no-space",                             11),
    )

    verify(len(tree.blocks) == len(expected),
           "expected {} blocks in Ksource, got {}"
           .format(len(expected), len(tree.blocks)))

    for block, (source_type, path, linenr) in zip(tree.blocks, expected):
        verify(isinstance(block, SourceDirective),
               "expected a SourceDirective, got " + repr(block))
        verify_equal(block.source_type, source_type)
        verify_equal(block.path, path)
        verify_equal(block.linenr, linenr)
        verify_equal(block.filename, fixture("Ksource"))

    # gsource and grsource are deprecated
    verify_equal(len(p.warnings), 2)
    if len(p.warnings) == 2:
        verify(":6: warning: 'gsource'" in p.warnings[0],
               "bad gsource warning: " + p.warnings[0])
        verify(":8: warning: 'grsource'" in p.warnings[1],
               "bad grsource warning: " + p.warnings[1])

    # Blank lines do not show up in the tree
    tree = quiet.parse('source "foo"\n\nsource\t"bar"\t\n')
    verify_equal(len(tree.blocks), 2)
    verify_equal([block.path for block in tree.blocks], ["foo", "bar"])

    verify_equal(quiet.parse("").blocks, ())
    verify_equal(quiet.parse("\n\n# just a comment\n \t\n").blocks, ())

    # Line terminators
    tree = quiet.parse('source "a"\r\nosource "b"\r\n')
    verify_equal([block.path for block in tree.blocks], ["a", "b"])
    verify_equal(quiet.parse('source "a"').blocks[0].path, "a")
    verify_equal(quiet.parse('\n\nsource "a"').blocks[0].linenr, 3)

    # UTF-8 bytes are decoded
    verify_equal(quiet.parse(b'source "\xc3\x85"\n').blocks[0].path,
                 "Å")

    # osource and gsource are the same thing
    osource = quiet.parse('osource "a.kconfig"\n').blocks[0]
    gsource = quiet.parse('gsource "a.kconfig"\n').blocks[0]
    verify_equal(osource.source_type, OSOURCE)
    verify_equal(gsource.source_type, OSOURCE)
    verify_equal(osource, gsource)
    verify_equal(str(gsource), 'osource "a.kconfig"\n')

    def verify_source_flags(s, is_optional, is_relative):
        source = quiet.parse(s).blocks[0]
        verify(source.is_optional == is_optional,
               "wrong is_optional for " + s)
        verify(source.is_relative == is_relative,
               "wrong is_relative for " + s)

    verify_source_flags('source "x"', False, False)
    verify_source_flags('rsource "x"', False, True)
    verify_source_flags('osource "x"', True, False)
    verify_source_flags('gsource "x"', True, False)
    verify_source_flags('orsource "x"', True, True)
    verify_source_flags('grsource "x"', True, True)

    verify_error(quiet.parse, "source\n", linenr=1, column=7)
    verify_error(quiet.parse, "source foo\n", linenr=1, column=8)
    verify_error(quiet.parse, 'source "a" "b"\n', linenr=1, column=12)
    verify_error(quiet.parse, 'source "a" extra\n', linenr=1, column=12)
    verify_error(quiet.parse, 'source "a" &&\n', linenr=1, column=12)
    verify_error(quiet.parse, 'rsource\n"a"\n', linenr=1, column=8)
    verify_error(quiet.parse, 'source "a"\nsources "b"\n', linenr=2,
                 column=1)


    print("Testing top-level constructs")

    for s in ("config FOO\n",
              "menuconfig FOO\n",
              'menu "foo"\n',
              "endmenu\n",
              "choice\n",
              "endchoice\n",
              "if FOO\n",
              "endif\n",
              'mainmenu "foo"\n',
              'comment "foo"\n',
              "bool\n",
              "FOO\n",
              '"foo"\n',
              "(\n"):

        verify_error(quiet.parse, 'source "ok"\n\n  ' + s, linenr=3,
                     column=3)

    e = verify_error(quiet.parse, read_fixture("Kmixed"), linenr=3,
                     column=1)
    if e is not None:
        verify("config blocks" in e.expected,
               "expected the error to mention config blocks: " + str(e))

    p = Parser(warn=False, config_blocks=True)
    tree = p.parse(read_fixture("Kmixed"), "Kmixed")

    verify_equal(tree.blocks, (
        SourceDirective(SOURCE, "Kconfig.first", None, None),
        ConfigBlock("A", False,
                    ((TYPE, BOOL, "A", None),
                     (HELP, "Help for A.")),
                    None, None),
        ConfigBlock("B", True,
                    ((TYPE, TRISTATE, None, None),
                     (SELECT, "A", None)),
                    None, None),
        SourceDirective(SOURCE, "Kconfig.second", None, None),
        ConfigBlock("C", False,
                    ((DEF_TYPE, BOOL, (AND, ident("A"), ident("B")), None),
                     (HELP, "Old-style help.")),
                    None, None)))

    verify_equal([block.linenr for block in tree.blocks], [1, 3, 8, 11, 12])
    verify_equal([block.filename for block in tree.blocks], ["Kmixed"]*5)

    verify_equal(len(p.warnings), 1)
    if p.warnings:
        verify_equal(p.warnings[0], "Kmixed:14: warning: '---help---' is "
                                    "deprecated, use 'help' instead")

    # Other constructs still end up as errors inside config blocks
    e = verify_error(p.parse, 'config A\n\tbool\nmenu "x"\n', linenr=3,
                     column=1)
    if e is not None:
        verify("'config A'" in str(e),
               "expected the error to name the block: " + str(e))


    print("Testing properties")

    block = quiet.parse_config(read_fixture("Kproperties"), "Kproperties")

    verify(isinstance(block, ConfigBlock),
           "parse_config() didn't give a ConfigBlock")
    verify_equal(block.name, "FOO")
    verify_equal(block.is_menuconfig, False)
    verify_equal(block.filename, "Kproperties")
    verify_equal(block.linenr, 2)

    expected = (
        (TYPE, BOOL, "Foo prompt", (AND, ident("BAR"), ident("BAZ"))),
        (TYPE, BOOL, None, None),
        (TYPE, TRISTATE, None, None),
        (TYPE, INT, "int prompt", None),
        (TYPE, HEX, None, None),
        (TYPE, STRING, None, None),
        (DEPENDS_ON, (OR, ident("A"), (AND, ident("B"), (NOT, ident("C"))))),
        (SELECT, "D", None),
        (SELECT, "E", ident("F")),
        (DEFAULT, ident("y"), None),
        (DEFAULT, ident("m"), (NOT, ident("G"))),
        (DEF_TYPE, BOOL, ident("y"), None),
        (DEF_TYPE, TRISTATE, ident("m"), ident("H")),
        (DEF_TYPE, INT, ident("I"), None),
        (DEF_TYPE, HEX, ident("J"), ident("K")),
        (DEF_TYPE, STRING, ident("L"), None),
        (PROMPT, "another prompt", (EQUAL, ident("M"), ident("N"))),
        (RANGE, "LOW", "HIGH", None),
        (RANGE, "n", "y", ident("O")),
        (IMPLY, "P", None),
        (IMPLY, "Q", (UNEQUAL, ident("R"), ident("S"))),
        (VISIBLE_IF, ident("T")),
        (OPTION, ENV, "HOME"),
        (OPTION, DEFCONFIG_LIST, None),
        (OPTION, MODULES, None),
        (OPTION, ALLNOCONFIG_Y, None),
        (OPTIONAL,),
        (HELP, "Help for FOO.\n\n  Indented more.\n# Not a comment"),
        (DEPENDS_ON, ident("U")),
    )

    verify(len(block.properties) == len(expected),
           "expected {} properties, got {}"
           .format(len(expected), len(block.properties)))

    for prop, expected_prop in zip(block.properties, expected):
        verify_equal(prop, expected_prop)

    block = quiet.parse_config("menuconfig BAR\n")
    verify_equal(block.name, "BAR")
    verify_equal(block.is_menuconfig, True)
    verify_equal(block.properties, ())
    verify_equal(block.filename, None)
    verify_equal(block.linenr, 1)

    # Properties don't need to be indented
    verify_equal(quiet.parse_config("config A\nbool\n").properties,
                 ((TYPE, BOOL, None, None),))

    def verify_props(s, *props):
        block = quiet.parse_config("config FOO\n" + s)
        verify(block.properties == props,
               "expected {!r} to give the properties {}, gave {}"
               .format(s, props, block.properties))

    verify_props('\tstring "s" if A = B\n',
                 (TYPE, STRING, "s", (EQUAL, ident("A"), ident("B"))))
    verify_props('\tbool"p"\n', (TYPE, BOOL, "p", None))
    verify_props("\tdepends on A\n\tdepends on B\n",
                 (DEPENDS_ON, ident("A")), (DEPENDS_ON, ident("B")))
    verify_props("\tdefault A && (B || C) if !D\n",
                 (DEFAULT, (AND, ident("A"), (OR, ident("B"), ident("C"))),
                  (NOT, ident("D"))))
    verify_props('\toption env = "ARCH"\n', (OPTION, ENV, "ARCH"))

    # The targets of select and imply can't be n, m, or y, but anything
    # longer is fine
    for keyword in "select", "imply":
        for name in "n", "m", "y":
            e = verify_error(quiet.parse_config,
                             "config FOO\n\t{} {}\n".format(keyword, name),
                             linenr=2, column=len(keyword) + 3)
            if e is not None:
                verify("constant" in e.expected,
                       "expected the error to mention constants: " + str(e))

        prop = SELECT if keyword == "select" else IMPLY
        verify_props("\t{} yes\n".format(keyword), (prop, "yes", None))
        verify_props("\t{} ny\n".format(keyword), (prop, "ny", None))
        verify_props("\t{} Y\n".format(keyword), (prop, "Y", None))
        verify_props("\t{} y_\n".format(keyword), (prop, "y_", None))

    # The tristate constants are fine for 'range'
    verify_props("\trange n m\n", (RANGE, "n", "m", None))


    print("Testing property errors")

    def verify_prop_bad(s, column):
        """
        Verifies that the property line 's' gives an error on line 2 at
        'column'
        """
        verify_error(quiet.parse_config, "config FOO\n" + s + "\n", linenr=2,
                     column=column)

    verify_prop_bad('\tprompt "x"', 12)
    verify_prop_bad("\tprompt x if A", 9)
    verify_prop_bad('\tprompt "x" if', 15)
    verify_prop_bad("\tdepends A", 10)
    verify_prop_bad("\tdepends on", 12)
    verify_prop_bad("\tdepends on A && B && C", 20)
    verify_prop_bad("\tvisible A", 10)
    verify_prop_bad("\toption", 8)
    verify_prop_bad("\toption foo", 9)
    verify_prop_bad('\toption env "X"', 13)
    verify_prop_bad("\toption env=X", 13)
    verify_prop_bad("\toption modules extra", 17)
    verify_prop_bad("\tbool if A", 7)
    verify_prop_bad('\tbool "p" A', 11)
    verify_prop_bad("\tbool A", 7)
    verify_prop_bad("\trange A", 9)
    verify_prop_bad("\trange A B C", 12)
    verify_prop_bad('\trange "1" "2"', 8)
    verify_prop_bad("\tselect", 8)
    verify_prop_bad("\tselect A B", 11)
    verify_prop_bad("\tselect A if", 13)
    verify_prop_bad('\tselect "A"', 9)
    verify_prop_bad("\tdefault", 9)
    verify_prop_bad("\tdefault y y", 12)
    verify_prop_bad("\tdefault 1", 10)
    verify_prop_bad('\tdefault "foo"', 10)
    verify_prop_bad("\tdef_bool", 10)
    verify_prop_bad("\toptional A", 11)
    verify_prop_bad("\thelp foo", 7)

    e = verify_error(quiet.parse_config, "config FOO\n\tbar baz\n",
                     linenr=2, column=2)
    if e is not None:
        verify("'config FOO'" in str(e) and "'bar baz'" in str(e),
               "expected the error to name the block and line: " + str(e))

    e = verify_error(quiet.parse_config, "menuconfig FOO\n\tmenu\n",
                     linenr=2, column=2)
    if e is not None:
        verify("'menuconfig FOO'" in str(e),
               "expected the error to name the block: " + str(e))

    # Only one block is parsed
    verify_error(quiet.parse_config, "config A\nconfig B\n", linenr=2,
                 column=1)
    verify_error(quiet.parse_config, 'config A\nsource "b"\n', linenr=2,
                 column=1)

    verify_error(quiet.parse_config, "", linenr=1, column=1)
    verify_error(quiet.parse_config, "\n\n", linenr=2, column=1)
    verify_error(quiet.parse_config, 'source "a"\n', linenr=1, column=1)
    verify_error(quiet.parse_config, "config\n", linenr=1, column=7)
    verify_error(quiet.parse_config, "config bool\n", linenr=1, column=8)
    verify_error(quiet.parse_config, "config FOO BAR\n", linenr=1,
                 column=12)
    verify_error(quiet.parse_config, 'config "FOO"\n', linenr=1, column=8)


    print("Testing help texts")

    def verify_help(s, *props):
        """
        Verifies that 'config FOO\\n' + s parses to the properties 'props'
        """
        verify_props(s, *props)

    verify_help("help\n  line one\n  line two\ndefault y\n",
                (HELP, "line one\nline two"),
                (DEFAULT, ident("y"), None))

    # Tab after a two-space help text
    verify_help("help\n  two spaces\n\tdefault y\n",
                (HELP, "two spaces"),
                (DEFAULT, ident("y"), None))

    # Eight spaces are not a tab
    verify_help("help\n        eight spaces\n\tdefault y\n",
                (HELP, "eight spaces"),
                (DEFAULT, ident("y"), None))

    # Same length, different characters
    verify_help("help\n \tfirst\n\t default n\n",
                (HELP, "first"),
                (DEFAULT, ident("n"), None))

    e = verify_error(quiet.parse_config,
                     "config FOO\nhelp\n  two spaces\n\tone tab\n",
                     linenr=4, column=2)
    if e is not None:
        verify("'config FOO'" in str(e),
               "expected the error to name the block: " + str(e))

    # Deeper indentation and blank lines are kept
    verify_help("\thelp\n\t  a\n\t    b\n\n\t  \n\t  c\n",
                (HELP, "a\n  b\n\n\nc"))

    # Blank lines before the text are skipped
    verify_help("help\n\n \t\n  a\n", (HELP, "a"))

    # Trailing blank lines are dropped, also at the end of the input
    verify_help("help\n  text\n\n  \n\t\n", (HELP, "text"))
    verify_help("help\n  text\n\n\nselect A\n",
                (HELP, "text"),
                (SELECT, "A", None))

    # Whitespace past the prefix is kept on lines that are otherwise blank.
    # Blank lines without the prefix are empty lines.
    verify_help("help\n  a\n    \n \n  b\n", (HELP, "a\n  \n\nb"))
    verify_help("\thelp\n\t  a\n\t   \t\n\t  b\n", (HELP, "a\n \t\nb"))

    # ...but not at the end of the text
    verify_help("help\n  a\n    \n\t\n", (HELP, "a"))
    verify_help("help\n  a\n    \nselect A\n",
                (HELP, "a"),
                (SELECT, "A", None))

    block = quiet.parse_config("config FOO\nhelp\n  a\n    \n  b\n")
    verify_equal(quiet.parse_config(str(block)), block)

    # No final newline
    verify_help("help\n  text", (HELP, "text"))

    # CRLF line endings
    verify_help("help\r\n  a\r\n\r\n  b\r\n", (HELP, "a\n\nb"))

    # '#' is not special in help texts, and a comment can follow 'help'
    verify_help("help # comment\n  # text\n  a # b\n",
                (HELP, "# text\na # b"))

    # A comment line ends the help text if it's less indented
    verify_help("help\n  text\n# comment\nselect A\n",
                (HELP, "text"),
                (SELECT, "A", None))

    # Keywords in the help text are just text
    verify_help("help\n  config BAR\n  select B\n",
                (HELP, "config BAR\nselect B"))

    # Several help texts
    verify_help("help\n  a\nhelp\n  b\n", (HELP, "a"), (HELP, "b"))

    # No help text
    verify_error(quiet.parse_config, "config FOO\nhelp\n", linenr=2,
                 column=1)
    verify_error(quiet.parse_config, "config FOO\n\thelp\n\n  \n", linenr=2,
                 column=2)
    verify_error(quiet.parse_config, "config FOO\n\thelp", linenr=2,
                 column=2)

    # Help text without indentation
    verify_error(quiet.parse_config, "config FOO\nhelp\ndefault y\n",
                 linenr=3, column=1)

    p = Parser(warn=False)
    verify_equal(p.parse_config("config FOO\n---help---\n  old\n").properties,
                 ((HELP, "old"),))
    verify_equal(len(p.warnings), 1)
    if p.warnings:
        verify("'---help---' is deprecated" in p.warnings[0],
               "bad ---help--- warning: " + p.warnings[0])


    print("Testing error locations")

    e = verify_error(quiet.parse, 'source "ok"\n  bad\n', linenr=2,
                     column=3)
    if e is not None:
        verify_equal(e.filename, None)
        verify_equal(e.offset, 14)
        verify_equal(e.line, "  bad")
        verify(str(e).startswith("Couldn't parse 'bad': "),
               "bad error message: " + str(e))

    e = verify_error(lambda s: quiet.parse(s, "Kfoo"),
                     'source "ok"\r\n  bad\r\n', linenr=2, column=3)
    if e is not None:
        verify_equal(e.filename, "Kfoo")
        verify_equal(e.offset, 15)
        verify_equal(e.line, "  bad")
        verify(str(e).startswith("Kfoo:2:3: Couldn't parse 'bad': "),
               "bad error message: " + str(e))

    # Byte offsets count UTF-8 bytes, columns count characters
    e = verify_error(quiet.parse_expr, "ÅÄ && ?",
                     KconfigTokenizationError, 1, 7)
    if e is not None:
        verify_equal(e.offset, 8)
        verify(str(e).startswith("Couldn't tokenize "),
               "bad error message: " + str(e))

    # Errors at end of input
    e = verify_error(quiet.parse_config, "config FOO\n\tprompt", linenr=2,
                     column=8)
    if e is not None:
        verify_equal(e.offset, 18)

    # Bytes that aren't valid UTF-8
    e = verify_error(quiet.parse, b'source "\xff"\n',
                     KconfigTokenizationError, 1, 9)
    if e is not None:
        verify_equal(e.offset, 8)
        verify("invalid UTF-8" in e.expected,
               "bad error for invalid UTF-8: " + str(e))

    e = verify_error(lambda s: quiet.parse(s, "Kutf8"),
                     b'source "a"\r\nsource "\xc3\x85\xc3"\r\n',
                     KconfigTokenizationError, 2, 10)
    if e is not None:
        verify_equal(e.offset, 22)
        verify_equal(e.filename, "Kutf8")
        verify_equal(e.line,
                     'source "\N{LATIN CAPITAL LETTER A WITH RING ABOVE}'
                     '\N{REPLACEMENT CHARACTER}"')
        verify(str(e).startswith("Kutf8:2:10: Couldn't tokenize "),
               "bad error message: " + str(e))

    verify_error(quiet.parse_config, b"config A\n\thelp\n\t  \xe0\x80\n",
                 KconfigTokenizationError, 3, 4)


    print("Testing round trips through str()")

    p = Parser(warn=False, config_blocks=True)

    tree = p.parse(read_fixture("Kmixed"))
    verify_equal(p.parse(str(tree)), tree)

    tree = p.parse(read_fixture("Ksource"))
    verify_equal(p.parse(str(tree)), tree)
    verify(str(tree).startswith('source "Kconfig.foo"\n\nrsource '
                                '"arch/*/Kconfig"\n\n'),
           "unexpected str() output: " + str(tree))

    block = quiet.parse_config(read_fixture("Kproperties"))
    verify_equal(quiet.parse_config(str(block)), block)

    block = quiet.parse_config('menuconfig FOO\n bool "x" if A\n help\n   a\n'
                               '\n   b\n select B if !(C || D)\n')
    verify_equal(str(block), 'menuconfig FOO\n'
                             '\tbool "x" if A\n'
                             '\thelp\n'
                             '\t  a\n'
                             '\n'
                             '\t  b\n'
                             '\tselect B if !(C || D)\n')

    verify_equal(str(quiet.parse("")), "")


    print("Testing __repr__()")

    tree = quiet.parse('source "a"\norsource "b"\n', "K")
    verify_equal(repr(tree), "<file K, 2 blocks>")
    verify_equal(repr(tree.blocks[0]), '<source "a", K:1>')
    verify_equal(repr(tree.blocks[1]),
                 '<orsource "b", optional, relative, K:2>')
    verify_equal(repr(quiet.parse('source "a"\n')),
                 "<file (no filename), 1 block>")

    block = quiet.parse_config("config FOO\n\tbool\n\thelp\n\t  a\n")
    verify_equal(repr(block), "<config FOO, 2 properties, has help>")

    block = quiet.parse_config("menuconfig FOO\n\tbool\n", "K")
    verify_equal(repr(block), "<menuconfig FOO, 1 property, K:1>")

    verify_equal(repr(Parser(warn=False, config_blocks=True)),
                 "<parser, warnings disabled, config blocks enabled, "
                 "0 warnings generated>")


    print("Testing warnings")

    p = Parser(warn=False)
    p.parse('gsource "a"\n')
    p.parse('grsource "b"\n', "Kfoo")
    verify_equal(p.warnings,
                 ["warning: 'gsource' is deprecated, use 'osource' instead",
                  "Kfoo:1: warning: 'grsource' is deprecated, use "
                  "'orsource' instead"])

    p.enable_warnings()
    verify(repr(p).startswith("<parser, warnings enabled"),
           "enable_warnings() didn't enable warnings")
    p.disable_warnings()
    verify(repr(p).startswith("<parser, warnings disabled"),
           "disable_warnings() didn't disable warnings")

    # Module-level shorthands
    verify_equal(parse('source "a"\n', warn=False).blocks[0].path, "a")
    verify_equal(parse_config("config A\n").name, "A")
    verify_equal(parse_expr("A && B"), (AND, ident("A"), ident("B")))
    verify_equal(len(parse('config A\n', config_blocks=True).blocks), 1)


    print("Testing kconfcheck")

    def verify_check(args, status):
        res = kconfcheck.main(["--quiet"] + args)
        verify(res == status,
               "expected kconfcheck {} to exit with {}, got {}"
               .format(" ".join(args), status, res))

    verify_check([fixture("Ksource")], 0)
    verify_check([fixture("Kbad")], 1)
    verify_check([fixture("Kmixed")], 1)
    verify_check(["--config-blocks", fixture("Kmixed")], 0)
    verify_check([fixture("Ksource"), fixture("Kbad")], 1)
    verify_check([fixture("Kbadutf8")], 1)
    verify_check([fixture("does-not-exist")], 1)


    print("\nAll selftests passed\n" if all_passed else
          "\nSome selftests failed\n")

if __name__ == "__main__":
    run_tests()
