"""
Test suite for the Husk lexer and token matchers.

Author: xwest
"""

import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from husk.lexer import (
    Lexer, TokenType, Cursor, KeywordMatcher, SingleCharMatcher,
    IntLitMatcher, IdentifierMatcher, default_matchers, UnexpectedCharacter,
)


class TestLexer(unittest.TestCase):
    """Tokenizing with the default matcher list."""

    def _types(self, source):
        return [token.type for token in Lexer(source).tokenize()]

    def test_let_statement(self):
        tokens = Lexer("let x = 10;").tokenize()

        self.assertEqual(
            [t.type for t in tokens],
            [TokenType.LET, TokenType.IDENT, TokenType.EQ, TokenType.INT_LIT, TokenType.SEMI],
        )
        self.assertEqual([t.value for t in tokens], [None, "x", None, "10", None])
        self.assertEqual([t.column for t in tokens], [1, 5, 7, 9, 11])
        self.assertTrue(all(t.line == 1 for t in tokens))

    def test_all_token_kinds(self):
        source = "fn main() { let a = 1; print(a + 2 - 3 * 4 / 5); return a; }"
        self.assertEqual(self._types(source), [
            TokenType.FN, TokenType.IDENT, TokenType.OPEN_PAREN, TokenType.CLOSE_PAREN,
            TokenType.OPEN_CURLY,
            TokenType.LET, TokenType.IDENT, TokenType.EQ, TokenType.INT_LIT, TokenType.SEMI,
            TokenType.PRINT, TokenType.OPEN_PAREN, TokenType.IDENT, TokenType.PLUS,
            TokenType.INT_LIT, TokenType.MINUS, TokenType.INT_LIT, TokenType.STAR,
            TokenType.INT_LIT, TokenType.FSLASH, TokenType.INT_LIT, TokenType.CLOSE_PAREN,
            TokenType.SEMI,
            TokenType.RETURN, TokenType.IDENT, TokenType.SEMI,
            TokenType.CLOSE_CURLY,
        ])

    def test_line_and_column_tracking(self):
        source = "fn main() {\n  print(1);\n}\n"
        tokens = Lexer(source).tokenize()

        print_token = tokens[5]
        self.assertEqual(print_token.type, TokenType.PRINT)
        self.assertEqual((print_token.line, print_token.column), (2, 3))

        close = tokens[-1]
        self.assertEqual(close.type, TokenType.CLOSE_CURLY)
        self.assertEqual((close.line, close.column), (3, 1))

        lines = [t.line for t in tokens]
        self.assertEqual(lines, sorted(lines))

    def test_offsets_and_filename(self):
        tokens = Lexer("let\nx", filename="demo.hk").tokenize()
        self.assertEqual(tokens[1].location.offset, 4)
        self.assertEqual(tokens[1].location.filename, "demo.hk")
        self.assertEqual(str(tokens[1].location), "demo.hk:2:1")

    def test_keyword_prefix_is_identifier(self):
        tokens = Lexer("lethal letx let1 fnord printer returned").tokenize()
        self.assertTrue(all(t.type == TokenType.IDENT for t in tokens))
        self.assertEqual([t.value for t in tokens],
                         ["lethal", "letx", "let1", "fnord", "printer", "returned"])

    def test_keyword_followed_by_punctuation(self):
        self.assertEqual(self._types("print(x)"),
                         [TokenType.PRINT, TokenType.OPEN_PAREN, TokenType.IDENT,
                          TokenType.CLOSE_PAREN])
        self.assertEqual(self._types("return;"), [TokenType.RETURN, TokenType.SEMI])

    def test_number_then_identifier(self):
        tokens = Lexer("42abc").tokenize()
        self.assertEqual([(t.type, t.value) for t in tokens],
                         [(TokenType.INT_LIT, "42"), (TokenType.IDENT, "abc")])
        self.assertEqual(tokens[1].column, 3)

    def test_empty_and_whitespace_only(self):
        self.assertEqual(Lexer("").tokenize(), [])
        self.assertEqual(Lexer(" \t\n\r\n  ").tokenize(), [])

    def test_unexpected_character(self):
        with self.assertRaises(UnexpectedCharacter) as ctx:
            Lexer("let x = 1;\nlet y = @;").tokenize()

        error = ctx.exception
        self.assertEqual(error.char, "@")
        self.assertEqual(error.location, (2, 9))
        self.assertEqual(error.code, "L001")
        self.assertIn("Unexpected character '@'", str(error))

    def test_underscore_is_not_an_identifier_character(self):
        with self.assertRaises(UnexpectedCharacter) as ctx:
            Lexer("let my_var = 1;").tokenize()
        self.assertEqual(ctx.exception.location, (1, 7))

    def test_non_ascii_letters_are_rejected(self):
        with self.assertRaises(UnexpectedCharacter) as ctx:
            Lexer("let π = 3;").tokenize()
        self.assertEqual(ctx.exception.char, "π")

    def test_error_carries_source_context(self):
        with self.assertRaises(UnexpectedCharacter) as ctx:
            Lexer("let x = #;", filename="bad.hk").tokenize()

        text = str(ctx.exception)
        self.assertIn("bad.hk", text)
        self.assertIn("1 | let x = #;", text)
        self.assertIn("^", text)


class TestMatchers(unittest.TestCase):
    """Individual matchers and custom matcher lists."""

    def test_keyword_matcher(self):
        matcher = KeywordMatcher("let", TokenType.LET)
        self.assertTrue(matcher.matches("let x", 0))
        self.assertTrue(matcher.matches("let", 0))
        self.assertTrue(matcher.matches("(let)", 1))
        self.assertFalse(matcher.matches("lethal", 0))
        self.assertFalse(matcher.matches("le", 0))

        cursor = Cursor("f.hk", pos=2, line=3, column=5)
        token = matcher.parse("  let x", cursor)
        self.assertEqual(token.type, TokenType.LET)
        self.assertIsNone(token.value)
        self.assertEqual((token.line, token.column), (3, 5))
        self.assertEqual((cursor.pos, cursor.column), (5, 8))

    def test_single_char_matcher(self):
        matcher = SingleCharMatcher(";", TokenType.SEMI)
        self.assertTrue(matcher.matches("a;", 1))
        self.assertFalse(matcher.matches("a;", 0))
        self.assertFalse(matcher.matches("a;", 2))

    def test_int_and_identifier_matchers(self):
        cursor = Cursor()
        token = IntLitMatcher().parse("123+", cursor)
        self.assertEqual((token.type, token.value, cursor.pos), (TokenType.INT_LIT, "123", 3))

        cursor = Cursor()
        token = IdentifierMatcher().parse("ab12 c", cursor)
        self.assertEqual((token.type, token.value, cursor.column), (TokenType.IDENT, "ab12", 5))
        self.assertFalse(IdentifierMatcher().matches("1ab", 0))

    def test_default_matchers_order(self):
        matchers = default_matchers()
        self.assertIsInstance(matchers[0], KeywordMatcher)
        self.assertIsInstance(matchers[-1], IdentifierMatcher)
        self.assertIsInstance(matchers[-2], IntLitMatcher)

    def test_default_matchers_are_not_shared(self):
        first, second = Lexer("a"), Lexer("b")
        self.assertIsNot(first.matchers, second.matchers)
        self.assertIsNot(default_matchers(), default_matchers())

    def test_custom_matcher_set(self):
        matchers = [IdentifierMatcher(), SingleCharMatcher("%", TokenType.STAR)]
        tokens = Lexer("a % b", matchers=matchers).tokenize()
        self.assertEqual([t.type for t in tokens],
                         [TokenType.IDENT, TokenType.STAR, TokenType.IDENT])

        with self.assertRaises(UnexpectedCharacter):
            Lexer("a + b", matchers=matchers).tokenize()

    def test_matcher_order_decides(self):
        # Identifier first swallows the keyword
        matchers = [IdentifierMatcher(), KeywordMatcher("let", TokenType.LET)]
        tokens = Lexer("let", matchers=matchers).tokenize()
        self.assertEqual(tokens[0].type, TokenType.IDENT)


if __name__ == '__main__':
    unittest.main()
