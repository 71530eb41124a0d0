# Copyright (c) 2026, The kconfparse developers
# SPDX-License-Identifier: ISC

"""
Overview
========

kconfparse is a Python library for parsing Kconfig-style configuration
description files into a syntax tree. It deals with the syntax only:
tokenization, 'source' directives, 'config'/'menuconfig' blocks and their
properties, expressions, and help texts.

Things that are deliberately left to other code:

 - Evaluating expressions, resolving dependencies and computing default
   values

 - Looking up the files named in 'source' statements. Parsing does no I/O at
   all. The caller reads the file and passes in its text (a str, or UTF-8
   encoded bytes).

 - Reading and writing .config files

Parsing is all-or-nothing. Either a complete tree is returned or
KconfigSyntaxError is raised for the first error found, with the filename,
line number, column, and byte offset of the error.

Basic usage:

  import kconfparse

  with open("Kconfig", "rb") as f:
      tree = kconfparse.parse(f.read(), "Kconfig")

  for block in tree.blocks:
      print(repr(block))


Top-level constructs
====================

By default, only 'source' statements (and blank/comment lines) are accepted at
the top level of a file:

  source "foo"       SOURCE
  rsource "foo"      RSOURCE
  osource "foo"      OSOURCE      (gsource is an old spelling of osource)
  orsource "foo"     ORSOURCE     (grsource is an old spelling of orsource)

'config' and 'menuconfig' blocks can be parsed on their own with
parse_config(). Parser(config_blocks=True) also accepts them at the top level.
Other structural keywords (menu, choice, if, mainmenu, comment, and the
matching end* keywords) are reserved and give a syntax error.


Expression format
=================

Expressions use a simple tuple-based format with the expression type in the
first element. A, B, C, ... are identifiers. NOT is the kconfparse.NOT
constant, etc.

Expression            Representation
----------            --------------
A                     (IDENT, "A")
!A                    (NOT, (IDENT, "A"))
A && B                (AND, (IDENT, "A"), (IDENT, "B"))
A || B                (OR, (IDENT, "A"), (IDENT, "B"))
A = B                 (EQUAL, (IDENT, "A"), (IDENT, "B"))
A != B                (UNEQUAL, (IDENT, "A"), (IDENT, "B"))
!A < B                (LESS, (NOT, (IDENT, "A")), (IDENT, "B"))
A || (B && C)         (OR, (IDENT, "A"), (AND, (IDENT, "B"), (IDENT, "C")))

An expression holds at most one binary operator at each level. A && B && C is
a syntax error and needs to be written as e.g. A && (B && C). There is no
precedence between the operators; &&, ||, and the relations all fill the same
slot. The operands of binary operators and '!' are identifiers or
parenthesized expressions.


Property format
===============

ConfigBlock.properties holds the properties of a block in the order they
appear, as tuples with the property type in the first element. 'cond' is the
expression from a trailing 'if <expr>', or None if there is no 'if'.

Property                  Representation
--------                  --------------
bool "prompt" if cond     (TYPE, BOOL, "prompt", cond)
tristate                  (TYPE, TRISTATE, None, None)
depends on expr           (DEPENDS_ON, expr)
help                      (HELP, "text")
select FOO if cond        (SELECT, "FOO", cond)
default expr if cond      (DEFAULT, expr, cond)
def_int expr if cond      (DEF_TYPE, INT, expr, cond)
prompt "prompt" if cond   (PROMPT, "prompt", cond)
range A B if cond         (RANGE, "A", "B", cond)
imply FOO if cond         (IMPLY, "FOO", cond)
visible if expr           (VISIBLE_IF, expr)
option env="FOO"          (OPTION, ENV, "FOO")
option defconfig_list     (OPTION, DEFCONFIG_LIST, None)
option modules            (OPTION, MODULES, None)
option allnoconfig_y      (OPTION, ALLNOCONFIG_Y, None)
optional                  (OPTIONAL,)

The 'if' is mandatory for 'prompt'. A prompt on a type line ('bool "foo"') is
optional, and can only have an 'if' if the prompt is there.

The targets of 'select' and 'imply' can't be the tristate constants n, m, and
y. 'select yes' is fine.


Strings and help texts
======================

String literals are double-quoted and can't contain backslashes or newlines.
No escape processing is done: the text between the quotes is used as is.

The help text after 'help' (or the old '---help---' spelling) is the block of
lines that start with the same whitespace as the first non-blank line after
it. The comparison is done character by character, so a line indented with a
tab does not continue a help text indented with eight spaces. Blank lines
within the text are kept. The indentation is removed from each line that has
it, and blank lines without it become empty lines. The lines are joined with
"\\n", with no trailing newline and no trailing blank lines.
"""

import re
import sys

# File layout:
#
# Public classes
# Public functions
# Internal classes
# Internal functions
# Public global constants
# Internal global constants

# Line length: 79 columns

#
# Public classes
#

class Parser:
    """
    Parses Kconfig text. A Parser instance keeps no state between calls
    besides its settings and the warnings it has generated, so one instance
    can be used to parse any number of files.

    The following attributes are available on Parser instances:

    warnings:
      A list of strings with all warnings generated so far, in the same
      format as they are printed. Warnings are added to this list even if
      printing of warnings is disabled.

    config_blocks:
      True if 'config' and 'menuconfig' blocks are accepted at the top level
      of files by parse(). False by default, which means only 'source'
      statements are accepted there.
    """

    __slots__ = (
        "_print_warnings",
        "config_blocks",
        "warnings",
    )

    #
    # Public interface
    #

    def __init__(self, warn=True, config_blocks=False):
        """
        Creates a new Parser.

        warn (default: True):
          True if warnings should be printed to stderr. This can be changed
          later with Parser.enable/disable_warnings().

        config_blocks (default: False):
          True if parse() should accept 'config' and 'menuconfig' blocks at
          the top level. See the module documentation.
        """
        self._print_warnings = warn
        self.config_blocks = config_blocks
        self.warnings = []

    def parse(self, s, filename=None):
        """
        Parses the Kconfig text 's' and returns a KconfigFile. Raises
        KconfigSyntaxError on syntax errors.

        s:
          The text to parse, as a str or as UTF-8 encoded bytes.

        filename (default: None):
          The name to use for the text in error messages, warnings, and
          locations. This is just a label. No file is opened.
        """
        line_feeder = _LineFeed(s, filename)

        blocks = []
        # A line that ended a 'config' block, to be handled next
        prev_tokens = None

        while 1:
            if prev_tokens is not None:
                tokens = prev_tokens
                prev_tokens = None
            else:
                line = line_feeder.next()
                if line is None:
                    break

                tokens = self._tokenize(line, line_feeder)
                if tokens is None:
                    continue

            t0 = tokens.peek()

            if t0 in _TOKEN_TO_SOURCE:
                blocks.append(self._parse_source(tokens, line_feeder))

            elif t0 in (_T_CONFIG, _T_MENUCONFIG):
                if not self.config_blocks:
                    _parse_error(line_feeder, tokens.col(),
                                 "config blocks are not allowed at the top "
                                 "level (only 'source' statements are)")

                block, prev_tokens = self._parse_config(tokens, line_feeder,
                                                        _BLOCK_END_TOKENS)
                blocks.append(block)

            else:
                _parse_error(line_feeder, tokens.col(),
                             "unrecognized construct")

        return KconfigFile(tuple(blocks), filename)

    def parse_config(self, s, filename=None):
        """
        Parses a single 'config' or 'menuconfig' block from 's' and returns it
        as a ConfigBlock. Apart from blank and comment lines, every line after
        the 'config' line must be a property of the block. Raises
        KconfigSyntaxError on syntax errors.

        's' and 'filename' work like for Parser.parse().
        """
        line_feeder = _LineFeed(s, filename)

        tokens = self._next_tokens(line_feeder)
        if tokens is None or tokens.peek() not in (_T_CONFIG, _T_MENUCONFIG):
            _parse_error(line_feeder, 0 if tokens is None else tokens.col(),
                         'expected "config" or "menuconfig"')

        block, _ = self._parse_config(tokens, line_feeder, frozenset())
        return block

    def parse_expr(self, s):
        """
        Parses the expression in 's' and returns it in the format described in
        the module documentation. Nothing but blank space and comments may
        appear after the expression.
        """
        line_feeder = _LineFeed(s, None)

        tokens = self._next_tokens(line_feeder)
        if tokens is None:
            _parse_error(line_feeder, 0, "expected an expression")

        expr = self._parse_expr(tokens, line_feeder)
        _check_eol(tokens, line_feeder)

        tokens = self._next_tokens(line_feeder)
        if tokens is not None:
            _parse_error(line_feeder, tokens.col(),
                         "expected end of expression")

        return expr

    def enable_warnings(self):
        """
        See Parser.__init__().
        """
        self._print_warnings = True

    def disable_warnings(self):
        """
        See Parser.__init__().
        """
        self._print_warnings = False

    def __repr__(self):
        """
        Returns a string with information about the parser when it is
        evaluated on e.g. the interactive Python prompt.
        """
        return "<{}>".format(", ".join((
            "parser",
            "warnings " + ("enabled" if self._print_warnings else "disabled"),
            "config blocks " +
                ("enabled" if self.config_blocks else "disabled"),
            "{} warning{} generated".format(
                len(self.warnings), "" if len(self.warnings) == 1 else "s")
        )))

    #
    # Private methods
    #

    def _tokenize(self, s, line_feeder):
        """
        Returns a _Feed instance with the tokens from the line 's', or None if
        the line is blank or just holds a comment.

        Keywords and operators become _T_* tokens, identifiers become plain
        strings, and string literals become _Literal instances. Keywords are
        looked up before identifiers, so a keyword never turns into an
        identifier.
        """
        tokens = []
        cols = []

        # The current index in the line being tokenized
        i = 0
        length = len(s)

        while 1:
            # Only spaces and tabs count as whitespace within a line
            while i < length and s[i] in " \t":
                i += 1

            if i >= length or s[i] == "#":
                break

            cols.append(i)

            # Test for an identifier/keyword first. This is the most common
            # case.
            match = _id_keyword_re_match(s, i)
            if match:
                name = match.group()
                name = name[:_ident_len(name)]
                if name:
                    keyword = _get_keyword(name)
                    tokens.append(name if keyword is None else keyword)
                    i += len(name)
                    continue

            c = s[i]

            if c == '"':
                match = _string_re_match(s, i)
                if not match:
                    # Find the character that broke the literal
                    end = _string_body_re_match(s, i + 1).end()
                    if end < length:
                        _tokenization_error(line_feeder, end,
                                            "backslash in string literal "
                                            "(escapes are not supported)")
                    _tokenization_error(line_feeder, i,
                                        "unterminated string literal")

                tokens.append(_Literal(match.group(1)))
                i = match.end()
                continue

            if c == "-" and s.startswith("---help---", i):
                self._warn("'---help---' is deprecated, use 'help' instead",
                           line_feeder.filename, line_feeder.linenr)
                tokens.append(_T_HELP)
                i += 10
                continue

            # Operators. Two-character operators are tried first, so that
            # e.g. '!=' isn't read as '!' followed by '='.
            token = _get_operator(s[i:i + 2])
            if token is not None:
                tokens.append(token)
                i += 2
                continue

            token = _get_operator(c)
            if token is not None:
                tokens.append(token)
                i += 1
                continue

            if c.isalnum() or c == "_":
                _tokenization_error(line_feeder, i,
                                    "identifiers must start with a letter")

            _tokenization_error(line_feeder, i,
                                "invalid character '{}'".format(c))

        return _Feed(tokens, cols, length) if tokens else None

    def _next_tokens(self, line_feeder):
        """
        Returns a _Feed with the tokens of the next non-blank line, or None at
        end of input.
        """
        while 1:
            line = line_feeder.next()
            if line is None:
                return None
            tokens = self._tokenize(line, line_feeder)
            if tokens is not None:
                return tokens

    def _parse_source(self, tokens, line_feeder):
        """
        Parses a 'source' statement (or one of its variants) from 'tokens' and
        returns a SourceDirective.
        """
        t0 = tokens.next()

        path = tokens.peek()
        if not isinstance(path, _Literal):
            _parse_error(line_feeder, tokens.col(),
                         "expected a quoted path after '{}'"
                         .format(_SOURCE_TO_STR[_TOKEN_TO_SOURCE[t0]]))
        tokens.next()

        _check_eol(tokens, line_feeder)

        if t0 in (_T_GSOURCE, _T_GRSOURCE):
            self._warn("'g{0}' is deprecated, use 'o{0}' instead"
                       .format("source" if t0 == _T_GSOURCE else "rsource"),
                       line_feeder.filename, line_feeder.linenr)

        return SourceDirective(_TOKEN_TO_SOURCE[t0], str(path),
                               line_feeder.filename, line_feeder.linenr)

    def _parse_config(self, tokens, line_feeder, end_tokens):
        """
        Parses a 'config'/'menuconfig' block, starting with the tokens of its
        first line.

        end_tokens:
          Tokens that end the block when they appear first on a line. Any
          other non-property line is an error.

        Returns a (ConfigBlock, tokens) tuple, where 'tokens' holds the line
        that ended the block, or None if the block ended at end of input.
        """
        t0 = tokens.next()

        name = tokens.peek()
        if not _is_ident(name):
            _parse_error(line_feeder, tokens.col(),
                         "expected a symbol name after '{}'"
                         .format("menuconfig" if t0 == _T_MENUCONFIG else
                                 "config"))
        tokens.next()

        _check_eol(tokens, line_feeder)

        linenr = line_feeder.linenr
        header = "{} {}".format(
            "menuconfig" if t0 == _T_MENUCONFIG else "config", name)

        properties, last_tokens = self._parse_properties(line_feeder, header,
                                                         end_tokens)

        return (ConfigBlock(name, t0 == _T_MENUCONFIG, tuple(properties),
                            line_feeder.filename, linenr),
                last_tokens)

    def _parse_properties(self, line_feeder, header, end_tokens):
        """
        Parses the properties of a 'config' block.

        header:
          The first line of the block, e.g. "config FOO". Used in error
          messages.

        end_tokens:
          See _parse_config().

        Stops at end of input or at a line starting with one of the tokens in
        'end_tokens'. Returns a (properties, tokens) tuple, where 'tokens'
        holds the line that ended the properties (rewound to its first token)
        or is None.
        """
        properties = []

        while 1:
            line = line_feeder.next()
            if line is None:
                return properties, None

            tokens = self._tokenize(line, line_feeder)
            if tokens is None:
                continue

            t0 = tokens.next()

            if t0 in _TOKEN_TO_TYPE:
                prompt = cond = None
                if isinstance(tokens.peek(), _Literal):
                    prompt = str(tokens.next())
                    cond = self._parse_cond(tokens, line_feeder)

                prop = (TYPE, _TOKEN_TO_TYPE[t0], prompt, cond)

            elif t0 == _T_DEPENDS:
                if not tokens.check(_T_ON):
                    _parse_error(line_feeder, tokens.col(),
                                 'expected "on" after "depends"')

                prop = (DEPENDS_ON, self._parse_expr(tokens, line_feeder))

            elif t0 == _T_HELP:
                help_col = tokens.cols[0]
                _check_eol(tokens, line_feeder)
                properties.append(
                    (HELP, _scan_help(line_feeder, help_col)))
                # The help text ends on a line of its own
                continue

            elif t0 == _T_SELECT:
                prop = (SELECT,
                        _parse_nonconst_ident(tokens, line_feeder, "select"),
                        self._parse_cond(tokens, line_feeder))

            elif t0 == _T_DEFAULT:
                prop = (DEFAULT,) + self._parse_val_and_cond(tokens,
                                                             line_feeder)

            elif t0 in _DEF_TOKEN_TO_TYPE:
                prop = (DEF_TYPE, _DEF_TOKEN_TO_TYPE[t0]) + \
                       self._parse_val_and_cond(tokens, line_feeder)

            elif t0 == _T_PROMPT:
                text = tokens.peek()
                if not isinstance(text, _Literal):
                    _parse_error(line_feeder, tokens.col(),
                                 'expected a quoted prompt after "prompt"')
                tokens.next()

                if not tokens.check(_T_IF):
                    _parse_error(line_feeder, tokens.col(),
                                 'expected "if" after the prompt')

                prop = (PROMPT, str(text),
                        self._parse_expr(tokens, line_feeder))

            elif t0 == _T_RANGE:
                prop = (RANGE,
                        _parse_ident(tokens, line_feeder, "range"),
                        _parse_ident(tokens, line_feeder, "range"),
                        self._parse_cond(tokens, line_feeder))

            elif t0 == _T_IMPLY:
                prop = (IMPLY,
                        _parse_nonconst_ident(tokens, line_feeder, "imply"),
                        self._parse_cond(tokens, line_feeder))

            elif t0 == _T_VISIBLE:
                if not tokens.check(_T_IF):
                    _parse_error(line_feeder, tokens.col(),
                                 'expected "if" after "visible"')

                prop = (VISIBLE_IF, self._parse_expr(tokens, line_feeder))

            elif t0 == _T_OPTION:
                if tokens.check(_T_ENV):
                    if not tokens.check(_T_EQUAL):
                        _parse_error(line_feeder, tokens.col(),
                                     'expected "=" after "env"')

                    env_var = tokens.peek()
                    if not isinstance(env_var, _Literal):
                        _parse_error(line_feeder, tokens.col(),
                                     "expected a quoted environment variable "
                                     "name")
                    tokens.next()

                    prop = (OPTION, ENV, str(env_var))

                elif tokens.check(_T_DEFCONFIG_LIST):
                    prop = (OPTION, DEFCONFIG_LIST, None)

                elif tokens.check(_T_MODULES):
                    prop = (OPTION, MODULES, None)

                elif tokens.check(_T_ALLNOCONFIG_Y):
                    prop = (OPTION, ALLNOCONFIG_Y, None)

                else:
                    _parse_error(line_feeder, tokens.col(),
                                 "unrecognized option")

            elif t0 == _T_OPTIONAL:
                prop = (OPTIONAL,)

            elif t0 in end_tokens:
                tokens.i = 0
                return properties, tokens

            else:
                _parse_error(line_feeder, tokens.cols[0],
                             "unrecognized property in '{}'".format(header))

            _check_eol(tokens, line_feeder)
            properties.append(prop)

    def _parse_cond(self, tokens, line_feeder):
        """
        Parses an optional 'if <expr>' construct and returns the parsed
        <expr>, or None if the next token is not 'if'.
        """
        return self._parse_expr(tokens, line_feeder) \
               if tokens.check(_T_IF) else None

    def _parse_val_and_cond(self, tokens, line_feeder):
        """
        Parses '<expr1> if <expr2>' constructs, where the 'if' part is
        optional. Returns a tuple containing the parsed expressions, with None
        as the second element if the 'if' part is missing.
        """
        return (self._parse_expr(tokens, line_feeder),
                self._parse_cond(tokens, line_feeder))

    def _parse_expr(self, tokens, line_feeder):
        """
        Parses an expression from 'tokens'. See the module documentation for
        the format of the result.
        """

        # Grammar:
        #
        #   expr:    operand [<binary operator> operand]
        #   operand: ['!'] primary
        #   primary: <identifier>
        #            '(' expr ')'
        #
        # The optional binary part is not repeated. The caller makes sure
        # nothing unexpected follows the expression, which is what rejects
        # 'A && B && C'.

        left = self._parse_operand(tokens, line_feeder)

        op = _TOKEN_TO_OP.get(tokens.peek())
        if op is None:
            return left
        tokens.next()

        return (op, left, self._parse_operand(tokens, line_feeder))

    def _parse_operand(self, tokens, line_feeder):
        if tokens.check(_T_NOT):
            return (NOT, self._parse_primary(tokens, line_feeder))
        return self._parse_primary(tokens, line_feeder)

    def _parse_primary(self, tokens, line_feeder):
        token = tokens.peek()

        if _is_ident(token):
            tokens.next()
            return (IDENT, token)

        if token == _T_OPEN_PAREN:
            tokens.next()
            expr = self._parse_expr(tokens, line_feeder)
            if not tokens.check(_T_CLOSE_PAREN):
                _parse_error(line_feeder, tokens.col(),
                             "missing end parenthesis")
            return expr

        _parse_error(line_feeder, tokens.col(),
                     "expected a symbol or '(' in expression")

    #
    # Warnings
    #

    def _warn(self, msg, filename=None, linenr=None):
        """For printing general warnings."""
        msg = _location_str(filename, linenr) + "warning: " + msg
        self.warnings.append(msg)
        if self._print_warnings:
            sys.stderr.write(msg + "\n")

class KconfigFile:
    """
    Represents a parsed Kconfig file. This is the root of the syntax tree
    returned by Parser.parse().

    The following attributes are available on KconfigFile instances. They
    should be viewed as read-only.

    blocks:
      A tuple with the top-level constructs in the file, in the order they
      appear. These are SourceDirective instances, plus ConfigBlock instances
      if Parser(config_blocks=True) was used. Blank lines and comments do not
      appear.

    filename:
      The filename passed to Parser.parse(), or None.
    """

    __slots__ = (
        "blocks",
        "filename",
    )

    def __init__(self, blocks, filename):
        self.blocks = blocks
        self.filename = filename

    def __eq__(self, other):
        return isinstance(other, KconfigFile) and self.blocks == other.blocks

    def __hash__(self):
        return hash(self.blocks)

    def __str__(self):
        """
        Returns the file in Kconfig format, with a blank line between
        top-level constructs. Parsing the returned string gives a KconfigFile
        equal to this one (locations aside).
        """
        return "\n".join([str(block) for block in self.blocks])

    def __repr__(self):
        return "<{}>".format(", ".join((
            "file " + ("(no filename)" if self.filename is None else
                       self.filename),
            "{} block{}".format(len(self.blocks),
                                "" if len(self.blocks) == 1 else "s")
        )))

class SourceDirective:
    """
    Represents a 'source' statement, or one of its variants:

      source "path"
      rsource "path"
      osource "path"   (or gsource "path")
      orsource "path"  (or grsource "path")

    The following attributes are available on SourceDirective instances.
    They should be viewed as read-only.

    source_type:
      One of the constants SOURCE, RSOURCE, OSOURCE, and ORSOURCE.

    path:
      The text between the quotes, exactly as written. Globbing and
      environment variable references are left for the caller to expand.

    is_optional:
      True for OSOURCE and ORSOURCE. It is not an error if no file matches an
      optional 'source'.

    is_relative:
      True for RSOURCE and ORSOURCE. The path is relative to the directory of
      the file containing the statement, rather than the top-level directory.

    filename/linenr:
      The location where the statement appears. 'filename' is None if no
      filename was passed to the parser.
    """

    __slots__ = (
        "filename",
        "linenr",
        "path",
        "source_type",
    )

    def __init__(self, source_type, path, filename, linenr):
        self.source_type = source_type
        self.path = path
        self.filename = filename
        self.linenr = linenr

    @property
    def is_optional(self):
        """
        See the class documentation.
        """
        return self.source_type in (OSOURCE, ORSOURCE)

    @property
    def is_relative(self):
        """
        See the class documentation.
        """
        return self.source_type in (RSOURCE, ORSOURCE)

    def __eq__(self, other):
        return isinstance(other, SourceDirective) and \
               self.source_type == other.source_type and \
               self.path == other.path

    def __hash__(self):
        return hash((self.source_type, self.path))

    def __str__(self):
        return '{} "{}"\n'.format(_SOURCE_TO_STR[self.source_type], self.path)

    def __repr__(self):
        fields = ['{} "{}"'.format(_SOURCE_TO_STR[self.source_type],
                                   self.path)]

        if self.is_optional:
            fields.append("optional")

        if self.is_relative:
            fields.append("relative")

        if self.filename is not None:
            fields.append("{}:{}".format(self.filename, self.linenr))

        return "<{}>".format(", ".join(fields))

class ConfigBlock:
    """
    Represents a symbol definition:

      (menu)config FOO
          ...

    The following attributes are available on ConfigBlock instances. They
    should be viewed as read-only.

    name:
      The name of the symbol, e.g. "FOO" for 'config FOO'.

    is_menuconfig:
      True if the block was defined with 'menuconfig' rather than 'config'.

    properties:
      A tuple with the properties of the block, in the order they appear. See
      the module documentation for the format.

    filename/linenr:
      The location of the 'config'/'menuconfig' line. 'filename' is None if
      no filename was passed to the parser.
    """

    __slots__ = (
        "filename",
        "is_menuconfig",
        "linenr",
        "name",
        "properties",
    )

    def __init__(self, name, is_menuconfig, properties, filename, linenr):
        self.name = name
        self.is_menuconfig = is_menuconfig
        self.properties = properties
        self.filename = filename
        self.linenr = linenr

    def __eq__(self, other):
        return isinstance(other, ConfigBlock) and \
               self.name == other.name and \
               self.is_menuconfig == other.is_menuconfig and \
               self.properties == other.properties

    def __hash__(self):
        return hash((self.name, self.is_menuconfig, self.properties))

    def __str__(self):
        """
        Returns the block in Kconfig format. Feeding the output back to
        parse_config() gives a ConfigBlock equal to this one.
        """
        lines = ["menuconfig " + self.name if self.is_menuconfig else
                 "config " + self.name]

        for prop in self.properties:
            if prop[0] == HELP:
                lines.append("\thelp")
                for line in prop[1].split("\n"):
                    lines.append("\t  " + line if line else "")
            else:
                lines.append("\t" + _prop_str(prop))

        return "\n".join(lines) + "\n"

    def __repr__(self):
        fields = [
            ("menuconfig " if self.is_menuconfig else "config ") + self.name,
            "{} propert{}".format(len(self.properties),
                                  "y" if len(self.properties) == 1 else "ies")
        ]

        for prop in self.properties:
            if prop[0] == HELP:
                fields.append("has help")
                break

        if self.filename is not None:
            fields.append("{}:{}".format(self.filename, self.linenr))

        return "<{}>".format(", ".join(fields))

class KconfigSyntaxError(Exception):
    """
    Exception raised for syntax errors. Raised as soon as the first error is
    found. No partial result is returned.

    The following attributes are available on KconfigSyntaxError instances:

    filename:
      The filename passed to the parser, or None.

    linenr/column:
      The 1-based line number and column of the error. Columns are counted in
      characters.

    offset:
      The 0-based byte offset of the error in the UTF-8 encoded input.

    line:
      The text of the line with the error, without the line terminator.

    expected:
      A short description of what was expected at the error location, e.g.
      'expected "on" after "depends"'.
    """
    def __init__(self, msg, filename=None, linenr=None, column=None,
                 offset=None, line=None, expected=None):
        super().__init__(msg)
        self.filename = filename
        self.linenr = linenr
        self.column = column
        self.offset = offset
        self.line = line
        self.expected = expected

class KconfigTokenizationError(KconfigSyntaxError):
    """
    Exception raised for lexical errors: unterminated string literals,
    backslashes in string literals, and invalid characters.
    """
    pass

#
# Public functions
#

def parse(s, filename=None, warn=True, config_blocks=False):
    """
    Shorthand for Parser(warn, config_blocks).parse(s, filename).
    """
    return Parser(warn, config_blocks).parse(s, filename)

def parse_config(s, filename=None, warn=True):
    """
    Shorthand for Parser(warn).parse_config(s, filename).
    """
    return Parser(warn).parse_config(s, filename)

def parse_expr(s):
    """
    Shorthand for Parser().parse_expr(s).
    """
    return Parser().parse_expr(s)

def expr_str(expr):
    """
    Returns the string representation of the expression 'expr', in a format
    that parse_expr() turns back into 'expr'.
    """
    if expr[0] == IDENT:
        return expr[1]

    if expr[0] == NOT:
        return "!" + _primary_str(expr[1])

    return "{} {} {}".format(_operand_str(expr[1]),
                             _OP_TO_STR[expr[0]],
                             _operand_str(expr[2]))

#
# Internal classes
#

class _Literal(str):
    """
    String literal token. Distinguishes "FOO" from the identifier FOO in
    token lists.
    """
    __slots__ = ()

class _Feed:
    """
    Class for working with the tokens from a line in a stream-like fashion.
    Keeps the column of each token for error messages.
    """

    __slots__ = (
        "cols",
        "end_col",
        "i",
        "items",
        "length",
    )

    def __init__(self, items, cols, end_col):
        self.items = items
        self.cols = cols
        self.end_col = end_col
        self.length = len(items)
        self.i = 0

    def next(self):
        if self.i >= self.length:
            return None
        item = self.items[self.i]
        self.i += 1
        return item

    def peek(self):
        return None if self.i >= self.length else self.items[self.i]

    def check(self, token):
        """
        Checks if the next token is 'token'. If so, removes it from the token
        feed and return True. Otherwise, leaves it in and return False.
        """
        if self.i < self.length and self.items[self.i] == token:
            self.i += 1
            return True
        return False

    def col(self):
        """
        Returns the 0-based column of the next token, or the end of the line
        if there are no more tokens.
        """
        return self.end_col if self.i >= self.length else self.cols[self.i]

class _LineFeed:
    """
    Feeds lines from a string. Keeps track of the filename and current line
    number. Lines are returned without their terminators ("\\n" or "\\r\\n").
    """

    __slots__ = (
        "filename",
        "length",
        "linenr",
        "lines",
        "starts",
        "text",
    )

    def __init__(self, s, filename):
        if isinstance(s, bytes):
            try:
                s = s.decode("utf-8")
            except UnicodeDecodeError as e:
                _decoding_error(s, filename, e)

        self.text = s
        self.filename = filename
        self.lines = []
        # Index in 'text' where each line starts
        self.starts = []

        start = 0
        for line in s.split("\n"):
            self.starts.append(start)
            start += len(line) + 1
            self.lines.append(line[:-1] if line.endswith("\r") else line)

        if s.endswith("\n") or not s:
            # Nothing after the final newline
            self.lines.pop()
            self.starts.pop()

        self.length = len(self.lines)
        # Number of the last line returned. 0 before the first line.
        self.linenr = 0

    def next(self):
        if self.linenr >= self.length:
            return None
        line = self.lines[self.linenr]
        self.linenr += 1
        return line

    def unread(self):
        """
        Makes next() return the last returned line again.
        """
        self.linenr -= 1

#
# Internal functions
#

def _check_eol(tokens, line_feeder):
    """
    Raises KconfigSyntaxError if there are tokens left on the line.
    """
    if tokens.peek() is not None:
        _parse_error(line_feeder, tokens.col(), "expected end of line")

def _ident_len(s):
    """
    Returns the length of the identifier at the start of 's', or 0 if 's'
    doesn't start with one. str.isidentifier() checks the Unicode
    XID_Start/XID_Continue classes. A leading '_' is not allowed.
    """
    if s[0] == "_":
        return 0

    n = len(s)
    while n and not s[:n].isidentifier():
        n -= 1
    return n

def _is_ident(token):
    # Keywords and operators are ints, string literals are _Literal, and
    # identifiers are plain strings
    return isinstance(token, str) and not isinstance(token, _Literal)

def _parse_ident(tokens, line_feeder, keyword):
    name = tokens.peek()
    if not _is_ident(name):
        _parse_error(line_feeder, tokens.col(),
                     "expected a symbol after '{}'".format(keyword))
    tokens.next()
    return name

def _parse_nonconst_ident(tokens, line_feeder, keyword):
    """
    Like _parse_ident(), but also rejects the tristate constants n, m, and y.
    """
    name = tokens.peek()
    if _is_ident(name) and name in ("n", "m", "y"):
        _parse_error(line_feeder, tokens.col(),
                     "expected a symbol after '{}', not the constant '{}'"
                     .format(keyword, name))
    return _parse_ident(tokens, line_feeder, keyword)

def _scan_help(line_feeder, help_col):
    """
    Reads the help text that follows a 'help' line and returns it. Leaves
    'line_feeder' at the first line after the help text.

    help_col:
      Column of the 'help' keyword, for errors.
    """
    help_linenr = line_feeder.linenr

    # Find the first non-blank line. Its indentation is the one that the rest
    # of the help text must start with.

    while 1:
        line = line_feeder.next()
        if line is None:
            _parse_error(line_feeder, help_col, "expected help text",
                         help_linenr)
        if not _blank_re_match(line):
            break

    indent = _indent_re_match(line).group()
    if not indent:
        _parse_error(line_feeder, 0, "expected indented help text")

    help_lines = [line[len(indent):]]

    while 1:
        line = line_feeder.next()
        if line is None:
            break

        if line.startswith(indent):
            # Whitespace past the prefix is kept, also on blank lines
            help_lines.append(line[len(indent):])
        elif _blank_re_match(line):
            help_lines.append("")
        else:
            line_feeder.unread()
            break

    # Trailing blank lines belong to the help text but are not part of its
    # value. The first line is never blank.
    while _blank_re_match(help_lines[-1]):
        help_lines.pop()

    return "\n".join(help_lines)

def _operand_str(expr):
    """
    expr_str() helper. Returns the string representation of 'expr', which is
    assumed to be an operand to a binary operator, with parentheses added if
    needed.
    """
    if expr[0] == NOT:
        return expr_str(expr)
    return _primary_str(expr)

def _primary_str(expr):
    if expr[0] == IDENT:
        return expr[1]
    return "({})".format(expr_str(expr))

def _cond_str(cond):
    return "" if cond is None else " if " + expr_str(cond)

def _prop_str(prop):
    """
    Returns the Kconfig line for the property 'prop' (anything but HELP),
    without indentation.
    """
    kind = prop[0]

    if kind == TYPE:
        _, type_, prompt, cond = prop
        if prompt is None:
            return _TYPENAME[type_]
        return '{} "{}"{}'.format(_TYPENAME[type_], prompt, _cond_str(cond))

    if kind == DEPENDS_ON:
        return "depends on " + expr_str(prop[1])

    if kind == SELECT:
        return "select " + prop[1] + _cond_str(prop[2])

    if kind == DEFAULT:
        return "default " + expr_str(prop[1]) + _cond_str(prop[2])

    if kind == DEF_TYPE:
        return "def_{} {}{}".format(_TYPENAME[prop[1]], expr_str(prop[2]),
                                    _cond_str(prop[3]))

    if kind == PROMPT:
        return 'prompt "{}" if {}'.format(prop[1], expr_str(prop[2]))

    if kind == RANGE:
        return "range {} {}{}".format(prop[1], prop[2], _cond_str(prop[3]))

    if kind == IMPLY:
        return "imply " + prop[1] + _cond_str(prop[2])

    if kind == VISIBLE_IF:
        return "visible if " + expr_str(prop[1])

    if kind == OPTION:
        if prop[1] == ENV:
            return 'option env="{}"'.format(prop[2])
        return "option " + _OPTION_TO_STR[prop[1]]

    # OPTIONAL
    return "optional"

def _location_str(filename, linenr, column=None):
    if filename is None:
        return ""
    if column is None:
        return "{}:{}: ".format(filename, linenr)
    return "{}:{}:{}: ".format(filename, linenr, column)

def _error(exc_class, verb, line_feeder, col, msg, linenr=None):
    """
    Raises 'exc_class' for an error at column 'col' (0-based) of line
    'linenr' (defaults to the current line).
    """
    if linenr is None:
        linenr = line_feeder.linenr
    # Errors at end of input are reported on the last line
    linenr = max(1, min(linenr, line_feeder.length))

    if line_feeder.length:
        line = line_feeder.lines[linenr - 1]
        start = line_feeder.starts[linenr - 1]
    else:
        line = ""
        start = 0

    offset = len(line_feeder.text[:start + col].encode("utf-8"))

    raise exc_class("{}Couldn't {} '{}': {}"
                    .format(_location_str(line_feeder.filename, linenr,
                                          col + 1),
                            verb, line.strip(), msg),
                    line_feeder.filename, linenr, col + 1, offset, line, msg)

def _decoding_error(b, filename, e):
    """
    Raises KconfigTokenizationError for the UnicodeDecodeError 'e', raised
    while decoding the bytes 'b'. The part before e.start is valid UTF-8.
    """
    before = b[:e.start].decode("utf-8")
    linenr = before.count("\n") + 1
    col = len(before) - before.rfind("\n") - 1

    line = b.split(b"\n")[linenr - 1].decode("utf-8", "replace")
    if line.endswith("\r"):
        line = line[:-1]

    msg = "invalid UTF-8 ({})".format(e.reason)
    raise KconfigTokenizationError(
        "{}Couldn't tokenize '{}': {}"
        .format(_location_str(filename, linenr, col + 1), line.strip(), msg),
        filename, linenr, col + 1, e.start, line, msg)

def _tokenization_error(line_feeder, col, msg):
    _error(KconfigTokenizationError, "tokenize", line_feeder, col, msg)

def _parse_error(line_feeder, col, msg, linenr=None):
    _error(KconfigSyntaxError, "parse", line_feeder, col, msg, linenr)

#
# Public global constants
#

# Integers representing 'source' statement types
(
    SOURCE,
    RSOURCE,
    OSOURCE,
    ORSOURCE,
) = range(4)

# Integers representing symbol types
(
    BOOL,
    HEX,
    INT,
    STRING,
    TRISTATE,
) = range(5)

# Integers representing expression types
(
    AND,
    OR,
    NOT,
    EQUAL,
    UNEQUAL,
    LESS,
    LESS_EQUAL,
    GREATER,
    GREATER_EQUAL,
    IDENT,
) = range(10)

# Integers representing property types
(
    TYPE,
    DEPENDS_ON,
    HELP,
    SELECT,
    DEFAULT,
    DEF_TYPE,
    PROMPT,
    RANGE,
    IMPLY,
    VISIBLE_IF,
    OPTION,
    OPTIONAL,
) = range(12)

# Integers representing 'option' types
(
    ENV,
    DEFCONFIG_LIST,
    MODULES,
    ALLNOCONFIG_Y,
) = range(4)

#
# Internal global constants
#

# Tokens
(
    _T_ALLNOCONFIG_Y,
    _T_AND,
    _T_BOOL,
    _T_CHOICE,
    _T_CLOSE_PAREN,
    _T_COMMENT,
    _T_CONFIG,
    _T_DEFAULT,
    _T_DEFCONFIG_LIST,
    _T_DEF_BOOL,
    _T_DEF_HEX,
    _T_DEF_INT,
    _T_DEF_STRING,
    _T_DEF_TRISTATE,
    _T_DEPENDS,
    _T_ENDCHOICE,
    _T_ENDIF,
    _T_ENDMENU,
    _T_ENV,
    _T_EQUAL,
    _T_GREATER,
    _T_GREATER_EQUAL,
    _T_GRSOURCE,
    _T_GSOURCE,
    _T_HELP,
    _T_HEX,
    _T_IF,
    _T_IMPLY,
    _T_INT,
    _T_LESS,
    _T_LESS_EQUAL,
    _T_MAINMENU,
    _T_MENU,
    _T_MENUCONFIG,
    _T_MODULES,
    _T_NOT,
    _T_ON,
    _T_OPEN_PAREN,
    _T_OPTION,
    _T_OPTIONAL,
    _T_OR,
    _T_ORSOURCE,
    _T_OSOURCE,
    _T_PROMPT,
    _T_RANGE,
    _T_RSOURCE,
    _T_SELECT,
    _T_SOURCE,
    _T_STRING,
    _T_TRISTATE,
    _T_UNEQUAL,
    _T_VISIBLE,
) = range(52)

# Keyword to token map. Note that the get() method is assigned directly as a
# small optimization.
_get_keyword = {
    "allnoconfig_y":  _T_ALLNOCONFIG_Y,
    "bool":           _T_BOOL,
    "boolean":        _T_BOOL,
    "choice":         _T_CHOICE,
    "comment":        _T_COMMENT,
    "config":         _T_CONFIG,
    "def_bool":       _T_DEF_BOOL,
    "def_hex":        _T_DEF_HEX,
    "def_int":        _T_DEF_INT,
    "def_string":     _T_DEF_STRING,
    "def_tristate":   _T_DEF_TRISTATE,
    "default":        _T_DEFAULT,
    "defconfig_list": _T_DEFCONFIG_LIST,
    "depends":        _T_DEPENDS,
    "endchoice":      _T_ENDCHOICE,
    "endif":          _T_ENDIF,
    "endmenu":        _T_ENDMENU,
    "env":            _T_ENV,
    "grsource":       _T_GRSOURCE,
    "gsource":        _T_GSOURCE,
    "help":           _T_HELP,
    "hex":            _T_HEX,
    "if":             _T_IF,
    "imply":          _T_IMPLY,
    "int":            _T_INT,
    "mainmenu":       _T_MAINMENU,
    "menu":           _T_MENU,
    "menuconfig":     _T_MENUCONFIG,
    "modules":        _T_MODULES,
    "on":             _T_ON,
    "option":         _T_OPTION,
    "optional":       _T_OPTIONAL,
    "orsource":       _T_ORSOURCE,
    "osource":        _T_OSOURCE,
    "prompt":         _T_PROMPT,
    "range":          _T_RANGE,
    "rsource":        _T_RSOURCE,
    "select":         _T_SELECT,
    "source":         _T_SOURCE,
    "string":         _T_STRING,
    "tristate":       _T_TRISTATE,
    "visible":        _T_VISIBLE,
}.get

# Operator to token map
_get_operator = {
    "!":  _T_NOT,
    "!=": _T_UNEQUAL,
    "&&": _T_AND,
    "(":  _T_OPEN_PAREN,
    ")":  _T_CLOSE_PAREN,
    "<":  _T_LESS,
    "<=": _T_LESS_EQUAL,
    "=":  _T_EQUAL,
    ">":  _T_GREATER,
    ">=": _T_GREATER_EQUAL,
    "||": _T_OR,
}.get

# Matches the run of characters up to the next delimiter. _ident_len() finds
# the identifier/keyword at the start of it.
_id_keyword_re_match = re.compile(r'[^ \t"#!&|=<>()]+').match

# Matches a complete string literal. Backslashes are not allowed.
_string_re_match = re.compile(r'"([^\\"\n]*)"').match

# Matches the body of a string literal, to find what ended it
_string_body_re_match = re.compile(r'[^\\"\n]*').match

# Matches a line with just spaces and tabs
_blank_re_match = re.compile(r"[ \t]*\Z").match

# Matches the indentation of a line
_indent_re_match = re.compile(r"[ \t]*").match

# 'source' token to source type mapping
_TOKEN_TO_SOURCE = {
    _T_GRSOURCE: ORSOURCE,
    _T_GSOURCE:  OSOURCE,
    _T_ORSOURCE: ORSOURCE,
    _T_OSOURCE:  OSOURCE,
    _T_RSOURCE:  RSOURCE,
    _T_SOURCE:   SOURCE,
}

_SOURCE_TO_STR = {
    SOURCE:   "source",
    RSOURCE:  "rsource",
    OSOURCE:  "osource",
    ORSOURCE: "orsource",
}

# Tokens that end a 'config' block at the top level of a file
_BLOCK_END_TOKENS = frozenset(_TOKEN_TO_SOURCE).union((
    _T_CONFIG,
    _T_MENUCONFIG,
))

# Strings to use for types
_TYPENAME = {
    BOOL:     "bool",
    HEX:      "hex",
    INT:      "int",
    STRING:   "string",
    TRISTATE: "tristate",
}

# Token to type mapping
_TOKEN_TO_TYPE = {
    _T_BOOL:     BOOL,
    _T_HEX:      HEX,
    _T_INT:      INT,
    _T_STRING:   STRING,
    _T_TRISTATE: TRISTATE,
}

# def_* token to type mapping
_DEF_TOKEN_TO_TYPE = {
    _T_DEF_BOOL:     BOOL,
    _T_DEF_HEX:      HEX,
    _T_DEF_INT:      INT,
    _T_DEF_STRING:   STRING,
    _T_DEF_TRISTATE: TRISTATE,
}

# Token to binary operator mapping
_TOKEN_TO_OP = {
    _T_AND:           AND,
    _T_EQUAL:         EQUAL,
    _T_GREATER:       GREATER,
    _T_GREATER_EQUAL: GREATER_EQUAL,
    _T_LESS:          LESS,
    _T_LESS_EQUAL:    LESS_EQUAL,
    _T_OR:            OR,
    _T_UNEQUAL:       UNEQUAL,
}

_OP_TO_STR = {
    AND:           "&&",
    EQUAL:         "=",
    GREATER:       ">",
    GREATER_EQUAL: ">=",
    LESS:          "<",
    LESS_EQUAL:    "<=",
    OR:            "||",
    UNEQUAL:       "!=",
}

_OPTION_TO_STR = {
    ALLNOCONFIG_Y:  "allnoconfig_y",
    DEFCONFIG_LIST: "defconfig_list",
    MODULES:        "modules",
}
