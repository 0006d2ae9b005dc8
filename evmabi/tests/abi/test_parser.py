"""Tests for the type string parser."""

import pytest

from evmabi.abi import TypeDescriptor, parse, parse_type_list, size_type, to_descriptor
from evmabi.abi.parser import TypeSyntaxError


def describe_parse_scalars():
    def parses_uint(expect):
        t = parse("uint256")
        expect(t.base) == "uint"
        expect(t.sub) == "256"
        expect(t.dims) == ()

    def parses_every_integer_width(expect):
        for width in range(8, 257, 8):
            expect(parse(f"int{width}").bits) == width
            expect(parse(f"uint{width}").bits) == width

    def parses_types_without_suffix(expect):
        expect(parse("address")) == TypeDescriptor("address")
        expect(parse("bool")) == TypeDescriptor("bool")
        expect(parse("string")) == TypeDescriptor("string")
        expect(parse("bytes")) == TypeDescriptor("bytes")

    def parses_sized_bytes(expect):
        expect(parse("bytes32").byte_length) == 32
        expect(parse("bytes1").byte_length) == 1
        expect(parse("bytes").byte_length) == None

    def parses_fixed_point(expect):
        t = parse("fixed128x128")
        expect(t.base) == "fixed"
        expect(t.sub) == "128x128"
        expect(t.fixed_bits) == (128, 128)
        expect(t.bits) == 256

    def maps_legacy_real_spellings(expect):
        expect(parse("real128x128")) == parse("fixed128x128")
        expect(parse("ureal64x64")) == parse("ufixed64x64")
        expect(parse("ureal64x64").canonical) == "ufixed64x64"

    def parses_hash(expect):
        t = parse("hash256")
        expect(t.base) == "hash"
        expect(t.bits) == 256

    def strips_surrounding_whitespace(expect):
        expect(parse("  uint8 ")) == parse("uint8")


def describe_parse_arrays():
    def parses_dynamic_array(expect):
        expect(parse("address[]").dims) == (0,)

    def parses_fixed_array(expect):
        expect(parse("bytes32[4]").dims) == (4,)

    def keeps_textual_dimension_order(expect):
        t = parse("uint256[2][]")
        expect(t.dims) == (2, 0)
        expect(t.is_dynamic) == True
        expect(t.subtype) == parse("uint256[2]")

    def parses_deep_nesting(expect):
        expect(parse("bool[][3][2][]").dims) == (0, 3, 2, 0)


def describe_parse_rejections():
    @pytest.mark.parametrize(
        "type_string",
        [
            "uint7",  # not a multiple of 8
            "uint0",
            "uint264",  # too wide
            "uint",  # missing width
            "int",
            "uint256x",
            "fixed127x1",  # high not a multiple of 8
            "fixed128x136",  # over 256 bits
            "fixed128",  # missing low part
            "ufixed",
            "bytes33",
            "bytes3x2",
            "string8",
            "address20",
            "bool8",
            "hash",
            "foo",
            "Uint256",
            "256",
        ],
    )
    def rejects_bad_base_or_suffix(type_string):
        with pytest.raises(TypeSyntaxError):
            parse(type_string)

    @pytest.mark.parametrize(
        "type_string",
        [
            "uint256[2x]",
            "uint256[",
            "uint256]",
            "uint256[2]x",
            "uint256[2] []",
            "uint256[-1]",
            "uint256[0]",
            "uint256[[]]",
        ],
    )
    def rejects_malformed_brackets(type_string):
        with pytest.raises(TypeSyntaxError):
            parse(type_string)

    def rejects_empty_string(expect):
        with pytest.raises(TypeSyntaxError):
            parse("   ")

    def rejects_non_string(expect):
        with pytest.raises(TypeSyntaxError):
            parse(256)

    def reports_offending_type(expect):
        with pytest.raises(TypeSyntaxError) as exc:
            parse("foo[2]")
        expect(exc.value.type_string) == "foo[2]"
        expect("Unrecognized type base" in str(exc.value)) == True

    def reports_bracket_position(expect):
        with pytest.raises(TypeSyntaxError) as exc:
            parse("uint8[1][2x]")
        expect(exc.value.position) == 8


def describe_parse_type_list():
    def splits_comma_joined_types(expect):
        types = parse_type_list("uint256, address,bytes32[]")
        expect([t.canonical for t in types]) == ["uint256", "address", "bytes32[]"]

    def returns_empty_list_for_no_types(expect):
        expect(parse_type_list("")) == []

    def rejects_empty_entry(expect):
        with pytest.raises(TypeSyntaxError):
            parse_type_list("uint256,,bool")


def describe_interning():
    def returns_same_descriptor_for_same_string(expect):
        expect(parse("uint256[]") is parse("uint256[]")) == True

    def passes_descriptors_through(expect):
        t = parse("int8")
        expect(to_descriptor(t) is t) == True
        expect(to_descriptor("int8")) == t

    def exposes_size_type(expect):
        expect(size_type()) == parse("uint256")
