import pytest

from lexer import Lexer
from tokens import TokenType
from tests.utils import lex, token_types


def test_lexer_declaration_token_stream():
    tokens = lex("int x = 5;")
    assert [t.type for t in tokens] == [
        TokenType.INT_TYPE,
        TokenType.IDENTIFIER,
        TokenType.ASSIGN,
        TokenType.NUMBER,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]
    assert tokens[1].lexeme == "x"
    assert tokens[3].lexeme == "5"
    assert tokens[-1].lexeme == ""


def test_lexer_recognizes_every_keyword():
    src = "array bool char cread csay false float for func if in int return true while"
    assert token_types(src)[:-1] == [
        TokenType.ARRAY_TYPE,
        TokenType.BOOL_TYPE,
        TokenType.CHAR_TYPE,
        TokenType.CREAD,
        TokenType.CSAY,
        TokenType.FALSE,
        TokenType.FLOAT_TYPE,
        TokenType.FOR,
        TokenType.FUNC,
        TokenType.IF,
        TokenType.IN,
        TokenType.INT_TYPE,
        TokenType.RETURN,
        TokenType.TRUE,
        TokenType.WHILE,
    ]


def test_keywords_are_case_sensitive_and_exact():
    tokens = lex("Int iff _if if2 returning")
    assert all(t.type == TokenType.IDENTIFIER for t in tokens[:-1])
    assert [t.lexeme for t in tokens[:-1]] == ["Int", "iff", "_if", "if2", "returning"]


@pytest.mark.parametrize(
    "comment",
    [
        "// line comment",
        "$ dollar comment",
        "/* block\n comment */",
        "%% percent\n comment %%",
    ],
)
def test_each_comment_form_contributes_no_tokens(comment):
    src = f"a = 1;\n{comment}\nb = 2;"
    assert token_types(src) == token_types("a = 1;\nb = 2;")


def test_consecutive_comments_are_all_skipped():
    assert token_types("// x \n // y\n$ z\n/* w */ %% v %% 7") == [
        TokenType.NUMBER,
        TokenType.EOF,
    ]


def test_unterminated_block_comment_consumes_rest_of_input():
    assert token_types("x /* never closed ; y = 2;") == [
        TokenType.IDENTIFIER,
        TokenType.EOF,
    ]
    assert token_types("x %% never closed") == [TokenType.IDENTIFIER, TokenType.EOF]


def test_single_percent_is_modulo_not_comment():
    assert token_types("a % b") == [
        TokenType.IDENTIFIER,
        TokenType.MOD,
        TokenType.IDENTIFIER,
        TokenType.EOF,
    ]


def test_number_stops_at_second_dot():
    tokens = lex("1.2.3")
    assert [(t.type, t.lexeme) for t in tokens] == [
        (TokenType.NUMBER, "1.2"),
        (TokenType.DOT, "."),
        (TokenType.NUMBER, "3"),
        (TokenType.EOF, ""),
    ]


def test_number_forms():
    tokens = lex("42 3.14 7.")
    assert [t.lexeme for t in tokens[:-1]] == ["42", "3.14", "7."]
    assert all(t.type == TokenType.NUMBER for t in tokens[:-1])


def test_maximal_munch_operators():
    tokens = lex("+++")
    assert [(t.type, t.lexeme) for t in tokens[:-1]] == [
        (TokenType.INCREMENT, "++"),
        (TokenType.PLUS, "+"),
    ]

    assert token_types("== != <= >= && || -- ++")[:-1] == [
        TokenType.EQ,
        TokenType.NEQ,
        TokenType.LTE,
        TokenType.GTE,
        TokenType.AND,
        TokenType.OR,
        TokenType.DECREMENT,
        TokenType.INCREMENT,
    ]
    assert token_types("+ - * / % = ! < >")[:-1] == [
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.STAR,
        TokenType.SLASH,
        TokenType.MOD,
        TokenType.ASSIGN,
        TokenType.NOT,
        TokenType.LT,
        TokenType.GT,
    ]


def test_lone_ampersand_and_pipe_are_unknown():
    tokens = lex("a & b | c")
    assert [(t.type, t.lexeme) for t in tokens if t.type == TokenType.UNKNOWN] == [
        (TokenType.UNKNOWN, "&"),
        (TokenType.UNKNOWN, "|"),
    ]


def test_unrecognized_characters_do_not_raise():
    tokens = lex("@ # ~ \f")
    assert [t.type for t in tokens] == [TokenType.UNKNOWN] * 4 + [TokenType.EOF]


def test_punctuation():
    assert token_types("( ) { } [ ] , ; .")[:-1] == [
        TokenType.LPAREN,
        TokenType.RPAREN,
        TokenType.LBRACE,
        TokenType.RBRACE,
        TokenType.LBRACKET,
        TokenType.RBRACKET,
        TokenType.COMMA,
        TokenType.SEMICOLON,
        TokenType.DOT,
    ]


def test_string_and_char_literals_keep_raw_text():
    tokens = lex(r'"say \"hi\"\n" ' + r"'\''")
    assert tokens[0].type == TokenType.STRING
    assert tokens[0].lexeme == r'"say \"hi\"\n"'
    assert tokens[1].type == TokenType.CHAR
    assert tokens[1].lexeme == r"'\''"
    assert tokens[2].type == TokenType.EOF


def test_unterminated_string_consumes_rest_of_input():
    tokens = lex('x = "open ended; y = 2;')
    assert tokens[2].type == TokenType.STRING
    assert tokens[2].lexeme == '"open ended; y = 2;'
    assert tokens[3].type == TokenType.EOF


def test_trailing_backslash_in_string_does_not_overrun():
    tokens = lex('"abc\\')
    assert tokens[0].lexeme == '"abc\\'
    assert tokens[1].type == TokenType.EOF


def test_line_and_column_tracking():
    tokens = lex("int x = 5;\n  while (x) {}")
    positions = [(t.lexeme, t.line, t.column) for t in tokens]
    assert positions[:5] == [
        ("int", 1, 1),
        ("x", 1, 5),
        ("=", 1, 7),
        ("5", 1, 9),
        (";", 1, 10),
    ]
    assert positions[5] == ("while", 2, 3)
    assert positions[7] == ("x", 2, 10)
    assert positions[9] == ("{", 2, 13)


def test_eof_token_reports_final_position():
    tokens = lex("a\nbc ")
    eof = tokens[-1]
    assert (eof.line, eof.column) == (2, 4)


def test_empty_and_blank_input():
    assert token_types("") == [TokenType.EOF]
    assert token_types(" \t\r\n ") == [TokenType.EOF]


def test_get_next_token_keeps_returning_eof():
    lexer = Lexer("x")
    assert lexer.get_next_token().type == TokenType.IDENTIFIER
    assert lexer.get_next_token().type == TokenType.EOF
    assert lexer.get_next_token().type == TokenType.EOF


def test_keep_comments_emits_comment_tokens():
    tokens = lex("a // one\n$ two\n/* three */ %% four %% b", keep_comments=True)
    assert [(t.type, t.lexeme) for t in tokens[:-1]] == [
        (TokenType.IDENTIFIER, "a"),
        (TokenType.COMMENT, "// one"),
        (TokenType.COMMENT, "$ two"),
        (TokenType.COMMENT, "/* three */"),
        (TokenType.COMMENT, "%% four %%"),
        (TokenType.IDENTIFIER, "b"),
    ]


SCAN_SAMPLES = [
    "int x = 5;",
    "func f(a, b) {\n  return a + b; // sum\n}\n",
    "$ header\n%% block\n%% array xs = [1, 2.5, 3.4.5];\n",
    'csay("a\\"b", \'c\') /* trailing */',
    "x = a & b | c @ 1.2.3 +++ --- ;\t\r\n",
    "/* unterminated",
    '"unterminated',
]


@pytest.mark.parametrize("src", SCAN_SAMPLES)
def test_tokens_and_skipped_spans_reconstruct_source(src):
    tokens = lex(src, keep_comments=True)
    rebuilt = []
    pos = 0
    for token in tokens:
        # Everything between two tokens is whitespace the lexer skipped.
        gap = src[pos : token.offset]
        assert gap.strip(" \t\r\n") == ""
        rebuilt.append(gap)
        assert src[token.offset : token.end] == token.lexeme
        rebuilt.append(token.lexeme)
        pos = token.end
    assert "".join(rebuilt) == src
    assert pos == len(src)


@pytest.mark.parametrize("src", SCAN_SAMPLES)
def test_skipping_comments_does_not_change_other_tokens(src):
    kept = [t for t in lex(src, keep_comments=True) if t.type != TokenType.COMMENT]
    assert kept == lex(src)
