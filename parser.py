"""
Parser for the PyCLite scripting language.

Overview and approach:
- This parser is a hand-written recursive-descent parser that pulls tokens
    from a `Lexer` on demand and keeps two of them in view: `self.current` and
    `self.lookahead`. The second token is what separates a call statement
    (`name(`) from an assignment (`name =`).
- Every grammar rule returns the `ASTNode` it built. Nodes are generic: the
    node kind says what the construct is, the token says where it came from
    and, for operators, which operator it is.

Key points:
- Expression parsing:
    - Binary operators are parsed with a precedence ladder stored in
        `self.precedence_levels` (lowest binding first). Each level parses the
        next tighter level, then loops over its own operators, so all binary
        operators are left-associative.
    - `parse_unary()` handles the prefix operators `-`, `!`, `++` and `--`
        by recursing into itself, so they nest right-to-left.
    - `parse_primary()` recognizes literals, identifiers (and calls when an
        identifier is followed by `(`), parenthesized expressions and array
        literals.

- Statement parsing:
    - `parse_instruction()` dispatches on the current token: typed and array
        declarations, `if`, `for`, `while`, `func`, `return`, the built-in
        `csay`/`cread` calls, call statements, assignments and, as a fallback,
        expression statements.
    - A function body may end with a `return` right before its closing
        brace; that return becomes the function node's fourth child instead
        of the body's last instruction.

- Errors:
    - The first grammar violation is recorded by `error()` and raised as a
        `ParseError`. Later calls to `error()` never overwrite it.
    - Rules that attach children while they parse (instruction lists,
        parameter and argument lists, array literals) wrap their node in
        `building()` so that it is released while the error unwinds.
    - `parse()` turns the failure into a `None` result; the recorded token
        and message stay available on the parser.

Examples:
    - `if (a == 1) { b = 2; }` gives `IF[EXPRESSION(==), INSTRUCTION_LIST[...]]`
    - `int x 5;` fails with "Expected '=' in declaration." at token `5`
"""

from __future__ import annotations
from typing import List, Optional, Tuple
from tokens import Token, TokenType
from lexer import Lexer
from ast_nodes import ASTNode, NodeType, building


class ParseError(SyntaxError):
    """A grammar violation, with the token where it was detected."""

    def __init__(self, message: str, token: Token):
        super().__init__(message)
        self.message = message
        self.token = token


UNARY_OPERATORS = (
    TokenType.MINUS,
    TokenType.NOT,
    TokenType.INCREMENT,
    TokenType.DECREMENT,
)


class Parser:
    def __init__(self, text: str):
        self.lexer = Lexer(text)
        self.current = self.lexer.get_next_token()
        self.lookahead = self.lexer.get_next_token()

        self.had_error = False
        self.error_message = ""
        self.error_token = self.current

        # Binary operator levels, lowest binding first.
        self.precedence_levels: List[Tuple[TokenType, ...]] = [
            (TokenType.OR,),
            (TokenType.AND,),
            (TokenType.EQ, TokenType.NEQ),
            (TokenType.LT, TokenType.LTE, TokenType.GT, TokenType.GTE),
            (TokenType.PLUS, TokenType.MINUS),
            (TokenType.STAR, TokenType.SLASH, TokenType.MOD),
        ]

    def error(self, token: Token, message: str) -> ParseError:
        """Record the first error only; return a ParseError for the recorded one."""
        if not self.had_error:
            self.had_error = True
            self.error_token = token
            self.error_message = message
        return ParseError(self.error_message, self.error_token)

    @property
    def parse_error(self) -> Optional[ParseError]:
        """The recorded error, if parsing failed."""
        if not self.had_error:
            return None
        return ParseError(self.error_message, self.error_token)

    def advance(self) -> Token:
        """Move to next token and return the one just consumed."""
        token = self.current
        self.current = self.lookahead
        self.lookahead = self.lexer.get_next_token()
        return token

    def check(self, token_type: TokenType) -> bool:
        return self.current.type == token_type

    def match(self, token_type: TokenType) -> bool:
        """Check if current token matches type, consume if true."""
        if self.current.type == token_type:
            self.advance()
            return True
        return False

    def expect(self, expected_type: TokenType, message: str) -> Token:
        """Expect and consume token of given type."""
        if self.current.type == expected_type:
            return self.advance()
        raise self.error(self.current, message)

    def parse(self) -> Optional[ASTNode]:
        """Parse a complete program.

        Returns the PROGRAM node, or None when the source has a syntax error.
        In that case `had_error`, `error_token` and `error_message` describe
        the first violation found.
        """
        try:
            return self.parse_program()
        except ParseError:
            return None
        except RecursionError:
            self.error(self.current, "Program is nested too deeply.")
            return None

    def parse_program(self) -> ASTNode:
        """program = instruction-list EOF"""
        with building(ASTNode(NodeType.PROGRAM, self.current)) as program:
            program.add_child(self.parse_instruction_list())
            if not self.check(TokenType.EOF):
                raise self.error(self.current, "Unexpected end of program.")
        return program

    def parse_instruction_list(self) -> ASTNode:
        """Parse instructions up to a closing brace or end of input."""
        with building(ASTNode(NodeType.INSTRUCTION_LIST, self.current)) as instructions:
            while not self.check(TokenType.EOF) and not self.check(TokenType.RBRACE):
                instructions.add_child(self.parse_instruction())
        return instructions

    def parse_instruction(self) -> ASTNode:
        """Parse a single instruction."""
        match self.current.type:
            case (
                TokenType.INT_TYPE
                | TokenType.FLOAT_TYPE
                | TokenType.CHAR_TYPE
                | TokenType.BOOL_TYPE
            ):
                return self.parse_declaration()
            case TokenType.ARRAY_TYPE:
                return self.parse_array_declaration()
            case TokenType.IF:
                return self.parse_if()
            case TokenType.FOR:
                return self.parse_for()
            case TokenType.WHILE:
                return self.parse_while()
            case TokenType.FUNC:
                return self.parse_function()
            case TokenType.RETURN:
                return self.parse_return()
            case TokenType.CSAY | TokenType.CREAD:
                return self.parse_special_call()
            case TokenType.IDENTIFIER:
                # Lookahead: `name (` is a call, anything else an assignment.
                if self.lookahead.type == TokenType.LPAREN:
                    return self.parse_call_statement()
                return self.parse_assignment()
            case _:
                return self.parse_expression_statement()

    def parse_identifier(self) -> ASTNode:
        token = self.expect(TokenType.IDENTIFIER, "Expected identifier.")
        return ASTNode(NodeType.IDENTIFIER, token)

    def parse_declaration(self) -> ASTNode:
        """type identifier = expression ;"""
        type_token = self.advance()
        identifier = self.parse_identifier()
        self.expect(TokenType.ASSIGN, "Expected '=' in declaration.")
        value = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after declaration.")
        return ASTNode(NodeType.DECLARATION, type_token, [identifier, value])

    def parse_array_declaration(self) -> ASTNode:
        """array identifier = [ ... ] ;

        Only an array literal is accepted on the right-hand side.
        """
        array_token = self.advance()
        identifier = self.parse_identifier()
        self.expect(TokenType.ASSIGN, "Expected '=' in array declaration.")
        elements = self.parse_array_literal()
        self.expect(TokenType.SEMICOLON, "Expected ';' after array declaration.")
        return ASTNode(NodeType.DECLARATION, array_token, [identifier, elements])

    def parse_assignment(self) -> ASTNode:
        """identifier = expression ;"""
        identifier = self.parse_identifier()
        self.expect(TokenType.ASSIGN, "Expected '=' in assignment.")
        value = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after assignment.")
        return ASTNode(NodeType.ASSIGNMENT, identifier.token, [identifier, value])

    def parse_if(self) -> ASTNode:
        """if ( expression ) { instructions }"""
        if_token = self.advance()
        self.expect(TokenType.LPAREN, "Expected '(' after 'if'.")
        condition = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expected ')' after if condition.")
        self.expect(TokenType.LBRACE, "Expected '{' to open if block.")
        body = self.parse_instruction_list()
        self.expect(TokenType.RBRACE, "Expected '}' to close if block.")
        return ASTNode(NodeType.IF, if_token, [condition, body])

    def parse_for(self) -> ASTNode:
        """for ( identifier in identifier ) { instructions }"""
        for_token = self.advance()
        self.expect(TokenType.LPAREN, "Expected '(' after 'for'.")
        iterator = self.parse_identifier()
        self.expect(TokenType.IN, "Expected 'in' in for header.")
        iterable = self.parse_identifier()
        self.expect(TokenType.RPAREN, "Expected ')' after for header.")
        self.expect(TokenType.LBRACE, "Expected '{' to open for body.")
        body = self.parse_instruction_list()
        self.expect(TokenType.RBRACE, "Expected '}' to close for body.")
        return ASTNode(NodeType.FOR, for_token, [iterator, iterable, body])

    def parse_while(self) -> ASTNode:
        """while ( expression ) { instructions }"""
        while_token = self.advance()
        self.expect(TokenType.LPAREN, "Expected '(' after 'while'.")
        condition = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expected ')' after while condition.")
        self.expect(TokenType.LBRACE, "Expected '{' to open while body.")
        body = self.parse_instruction_list()
        self.expect(TokenType.RBRACE, "Expected '}' to close while body.")
        return ASTNode(NodeType.WHILE, while_token, [condition, body])

    def parse_parameter_list(self) -> ASTNode:
        """Comma-separated bare identifiers, possibly none."""
        with building(ASTNode(NodeType.PARAM_LIST, self.current)) as params:
            if self.check(TokenType.RPAREN):
                return params
            while True:
                params.add_child(self.parse_identifier())
                if not self.match(TokenType.COMMA):
                    break
        return params

    def parse_function_body(self) -> Tuple[ASTNode, Optional[ASTNode]]:
        """Parse a function body, splitting off a return right before `}`.

        A `return` anywhere else stays in the body as a normal instruction.
        """
        trailing_return = None
        with building(ASTNode(NodeType.INSTRUCTION_LIST, self.current)) as body:
            while not self.check(TokenType.EOF) and not self.check(TokenType.RBRACE):
                if not self.check(TokenType.RETURN):
                    body.add_child(self.parse_instruction())
                    continue
                statement = self.parse_return()
                if self.check(TokenType.RBRACE):
                    trailing_return = statement
                    break
                body.add_child(statement)
        return body, trailing_return

    def parse_function(self) -> ASTNode:
        """func identifier ( params ) { instructions [return] }"""
        func_token = self.advance()
        name = self.parse_identifier()
        self.expect(TokenType.LPAREN, "Expected '(' after function name.")
        params = self.parse_parameter_list()
        self.expect(TokenType.RPAREN, "Expected ')' after parameters.")
        self.expect(TokenType.LBRACE, "Expected '{' to open function body.")
        body, trailing_return = self.parse_function_body()
        self.expect(TokenType.RBRACE, "Expected '}' to close function body.")

        function = ASTNode(NodeType.FUNCTION, func_token, [name, params, body])
        return function.add_child(trailing_return)

    def parse_return(self) -> ASTNode:
        """return expression ;"""
        return_token = self.advance()
        value = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after return value.")
        return ASTNode(NodeType.RETURN, return_token, [value])

    def parse_argument_list(self) -> ASTNode:
        """Comma-separated expressions, possibly none."""
        with building(ASTNode(NodeType.ARG_LIST, self.current)) as args:
            if self.check(TokenType.RPAREN):
                return args
            while True:
                args.add_child(self.parse_expression())
                if not self.match(TokenType.COMMA):
                    break
        return args

    def parse_call(self, callee: ASTNode) -> ASTNode:
        """( arguments ) following an already parsed callee."""
        call_token = self.expect(TokenType.LPAREN, "Expected '(' in call.")
        args = self.parse_argument_list()
        self.expect(TokenType.RPAREN, "Expected ')' to close call.")
        return ASTNode(NodeType.CALL, call_token, [callee, args])

    def parse_call_statement(self) -> ASTNode:
        """identifier ( arguments ) ;"""
        call = self.parse_call(self.parse_identifier())
        self.expect(TokenType.SEMICOLON, "Expected ';' after call.")
        return call

    def parse_special_call(self) -> ASTNode:
        """csay ( arguments ) ;  |  cread ( arguments ) identifier ;"""
        keyword = self.advance()
        self.expect(TokenType.LPAREN, "Expected '(' after built-in call.")
        args = self.parse_argument_list()
        self.expect(TokenType.RPAREN, "Expected ')' to close built-in call.")
        call = ASTNode(NodeType.CALL, keyword, [args])
        if keyword.type == TokenType.CREAD:
            call.add_child(self.parse_identifier())
        self.expect(TokenType.SEMICOLON, "Expected ';' after built-in call.")
        return call

    def parse_expression_statement(self) -> ASTNode:
        """expression ;"""
        expr = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after expression.")
        return ASTNode(NodeType.EXPRESSION, expr.token, [expr])

    def parse_expression(self) -> ASTNode:
        """Parse an expression."""
        return self.parse_binary(0)

    def parse_binary(self, level: int) -> ASTNode:
        """Parse one level of the precedence ladder, left-associatively."""
        if level == len(self.precedence_levels):
            return self.parse_unary()

        operators = self.precedence_levels[level]
        left = self.parse_binary(level + 1)
        while self.current.type in operators:
            operator = self.advance()
            right = self.parse_binary(level + 1)
            left = ASTNode(NodeType.EXPRESSION, operator, [left, right])
        return left

    def parse_unary(self) -> ASTNode:
        """Prefix operators: - ! ++ --"""
        if self.current.type in UNARY_OPERATORS:
            operator = self.advance()
            operand = self.parse_unary()
            return ASTNode(NodeType.EXPRESSION, operator, [operand])
        return self.parse_primary()

    def parse_primary(self) -> ASTNode:
        """Parse primary expressions (literals, identifiers, calls, parenthesized)."""
        token = self.current

        match token.type:
            case (
                TokenType.NUMBER
                | TokenType.STRING
                | TokenType.CHAR
                | TokenType.TRUE
                | TokenType.FALSE
            ):
                self.advance()
                return ASTNode(NodeType.LITERAL, token)

            case TokenType.IDENTIFIER:
                identifier = self.parse_identifier()
                if self.check(TokenType.LPAREN):
                    return self.parse_call(identifier)
                return identifier

            case TokenType.LPAREN:
                self.advance()  # Consume '('
                expr = self.parse_expression()
                self.expect(TokenType.RPAREN, "Expected ')' after expression.")
                return expr

            case TokenType.LBRACKET:
                return self.parse_array_literal()

            case _:
                raise self.error(token, "Invalid primary expression.")

    def parse_array_literal(self) -> ASTNode:
        """[ expression (, expression)* ]  or  [ ]"""
        bracket = self.expect(TokenType.LBRACKET, "Expected '['.")
        with building(ASTNode(NodeType.ARRAY_LITERAL, bracket)) as elements:
            if not self.check(TokenType.RBRACKET):
                while True:
                    elements.add_child(self.parse_expression())
                    if not self.match(TokenType.COMMA):
                        break
            self.expect(TokenType.RBRACKET, "Expected ']' after array elements.")
        return elements
