"""
Core types for string encoding.
"""

type Token = str
type TokenId = int
type Mapping = dict[Token, TokenId]
type EncodedRow = list[TokenId]
type RaggedOutput = list[list[TokenId]]
