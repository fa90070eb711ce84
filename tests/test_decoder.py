from frontmatterpy.decoder import (
    ArrayValue,
    OtherValue,
    OtherValueKind,
    Record,
    StringValue,
    StructuralDecoder,
    TriviaKind,
    TriviaToken,
    decode_tokens,
    value_kind_name,
)
from frontmatterpy.diagnostics import (
    DECODER_EXPECTED_VALUE,
    DECODER_UNEXPECTED_TRAILING_TEXT,
    DECODER_UNTERMINATED_ARRAY,
    DECODER_UNTERMINATED_STRING,
)
from frontmatterpy.stream import ChunkedEmitter
from frontmatterpy.text import TextRange
from tests._shared_cases import ManualLoop, RecordingSink, dedent, lex, semantic


def decode(source: str):
    structured, errors = decode_tokens(lex(source))
    return semantic(structured), errors


def test_records_with_array_and_string_values() -> None:
    source = dedent(
        """
        tools: ["a", 'b', c]
        description: "hello"
        """
    )

    records, errors = decode(source)

    assert errors == []
    assert len(records) == 2
    tools, description = records
    assert isinstance(tools, Record)
    assert tools.name.text == "tools"
    assert tools.name.range == TextRange(0, 5)
    assert tools.range == TextRange(0, 20)
    assert tools.raw == 'tools: ["a", \'b\', c]'

    assert isinstance(tools.value, ArrayValue)
    assert tools.value.range == TextRange(7, 20)
    assert [item.text for item in tools.value.items if isinstance(item, StringValue)] == ["a", "b", "c"]
    assert [item.range for item in tools.value.items] == [
        TextRange(8, 11),
        TextRange(13, 16),
        TextRange(18, 19),
    ]
    first = tools.value.items[0]
    assert isinstance(first, StringValue)
    assert first.raw == '"a"'
    assert first.quote == '"'
    assert first.is_quoted is True

    assert isinstance(description, Record)
    assert isinstance(description.value, StringValue)
    assert description.value.text == "hello"


def test_bare_scalars_are_classified() -> None:
    records, errors = decode("x: [true, 1.5, null, ~, -3, word, 'quoted']\n")

    assert errors == []
    value = records[0].value
    assert isinstance(value, ArrayValue)
    assert [value_kind_name(item) for item in value.items] == [
        "boolean",
        "number",
        "null",
        "null",
        "number",
        "string",
        "string",
    ]


def test_multiline_array_is_one_record() -> None:
    source = dedent(
        """
        tools: [
          "a",  # first
          "b"
        ]
        next: 1
        """
    )

    records, errors = decode(source)

    assert errors == []
    assert [record.name.text for record in records] == ["tools", "next"]
    tools = records[0]
    assert isinstance(tools.value, ArrayValue)
    assert [item.text for item in tools.value.items] == ["a", "b"]
    assert isinstance(records[1].value, OtherValue)
    assert records[1].value.value_kind == OtherValueKind.NUMBER


def test_nested_array_item() -> None:
    records, _ = decode("x: [a, [b, c]]\n")

    value = records[0].value
    assert isinstance(value, ArrayValue)
    assert isinstance(value.items[1], ArrayValue)
    assert len(value.items[1].items) == 2


def test_escaped_quotes_inside_strings() -> None:
    records, errors = decode('x: "a \\"b\\""\ny: \'it\'\'s\'\n')

    assert errors == []
    assert records[0].value.text == 'a "b"'
    assert records[1].value.text == "it's"


def test_record_without_value_gets_empty_null_value() -> None:
    records, errors = decode("tools:\n")

    assert errors == []
    value = records[0].value
    assert isinstance(value, OtherValue)
    assert value.value_kind == OtherValueKind.NULL
    assert value.range == TextRange(6, 6)
    assert records[0].range == TextRange(0, 6)


def test_bare_top_level_value_is_emitted_as_is() -> None:
    records, errors = decode('"just a string"\n[a]\n')

    assert errors == []
    assert isinstance(records[0], StringValue)
    assert isinstance(records[1], ArrayValue)


def test_trivia_and_comments_pass_through() -> None:
    structured, errors = decode_tokens(lex("# heading\n  tools: [a] # trailing\n"))

    assert errors == []
    trivia = [token for token in structured if isinstance(token, TriviaToken)]
    assert [token.kind for token in trivia] == [
        TriviaKind.COMMENT,
        TriviaKind.NEWLINE,
        TriviaKind.WHITESPACE,
        TriviaKind.WHITESPACE,
        TriviaKind.COMMENT,
        TriviaKind.NEWLINE,
    ]
    assert trivia[0].raw == "# heading"
    record = semantic(structured)[0]
    assert isinstance(record, Record)
    assert record.raw == "tools: [a]"


def test_hash_inside_a_word_is_not_a_comment() -> None:
    records, _ = decode("x: C#\n")

    assert records[0].value.raw == "C#"


def test_unterminated_array_at_end_of_stream() -> None:
    records, errors = decode("tools: [a, b")

    assert records == []
    assert len(errors) == 1
    assert errors[0].spec == DECODER_UNTERMINATED_ARRAY
    assert errors[0].range == TextRange(7, 12)


def test_unterminated_string_recovers_at_next_record() -> None:
    records, errors = decode('tools: ["a]\nname: x\n')

    assert [error.spec for error in errors] == [DECODER_UNTERMINATED_STRING, DECODER_UNTERMINATED_ARRAY]
    assert errors[0].range == TextRange(8, 11)
    assert errors[1].range == TextRange(7, 11)
    assert len(records) == 1
    assert records[0].name.text == "name"


def test_trailing_text_keeps_the_record() -> None:
    records, errors = decode("tools: [a] extra\n")

    assert len(records) == 1
    assert len(errors) == 1
    assert errors[0].spec == DECODER_UNEXPECTED_TRAILING_TEXT
    assert errors[0].range == TextRange(11, 16)


def test_missing_array_item() -> None:
    records, errors = decode("tools: [a, , b]\n")

    assert [error.spec for error in errors] == [DECODER_EXPECTED_VALUE]
    assert errors[0].range == TextRange(11, 12)
    assert [item.text for item in records[0].value.items] == ["a", "b"]


def test_decoder_error_converts_to_diagnostic() -> None:
    _, errors = decode("tools: [a, b")

    diagnostic = errors[0].to_diagnostic()

    assert diagnostic.code == "DECODER_UNTERMINATED_ARRAY"
    assert diagnostic.severity == "error"
    assert diagnostic.range == errors[0].range


def test_streaming_decoder_matches_batch_decode() -> None:
    source = dedent(
        """
        # comment
        tools: [
          "a", "b",
          c
        ]
        tools: "again"
        broken: "oops
        model: gpt
        """
    )
    tokens = lex(source)
    expected, expected_errors = decode_tokens(tokens)

    loop = ManualLoop()
    sink = RecordingSink()
    decoder = StructuralDecoder(ChunkedEmitter(tokens, batch_size=3, loop=loop))
    decoder.bind(sink)
    decoder.start()
    loop.run_until_idle()

    assert sink.items == expected
    assert [str(error) for error in sink.errors] == [str(error) for error in expected_errors]
    assert sink.end_count == 1
    assert decoder.ended is True


def test_destroyed_decoder_goes_silent() -> None:
    def destroy_on_first(sink: RecordingSink, item) -> None:
        decoder.destroy()

    loop = ManualLoop()
    sink = RecordingSink(on_item=destroy_on_first)
    emitter = ChunkedEmitter(lex("a: 1\nb: 2\nc: 3\n"), batch_size=2, loop=loop)
    decoder = StructuralDecoder(emitter)
    decoder.bind(sink)
    decoder.start()
    loop.run_until_idle()

    assert len(sink.items) == 1
    assert sink.end_count == 0
    assert emitter.destroyed is True
