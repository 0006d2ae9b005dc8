"""Tests for CLI interface."""

import json

from click.testing import CliRunner

from evmabi.cli import cli

STRING_HI = "0x" + (
    "0000000000000000000000000000000000000000000000000000000000000005"
    "0000000000000000000000000000000000000000000000000000000000000040"
    "0000000000000000000000000000000000000000000000000000000000000002"
    "6869000000000000000000000000000000000000000000000000000000000000"
)


def describe_info_command():
    def shows_type_table(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "uint256[2][],string"])
        expect(result.exit_code) == 0
        expect("uint256[2][]" in result.output) == True
        expect("dynamic" in result.output) == True

    def outputs_json(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "uint256,bytes3[2]", "--json"])
        expect(result.exit_code) == 0
        data = json.loads(result.output)
        expect(data["head_size"]) == 96
        expect(data["static_size"]) == 96
        expect(data["types"][1]["base"]) == "bytes"
        expect(data["types"][1]["dims"]) == [2]
        expect(data["types"][1]["size"]) == 64

    def fails_with_bad_type(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["info", "uint7"])
        expect(result.exit_code) == 1
        expect("Error:" in result.output) == True


def describe_encode_command():
    def encodes_values(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["encode", "uint256,string", "5", "hi"])
        expect(result.exit_code) == 0
        expect(result.output.strip()) == STRING_HI

    def encodes_json_arrays_and_hex_bytes(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["encode", "bytes2[],bool", '["0x0102", "0x0304"]', "true"])
        expect(result.exit_code) == 0
        data = bytes.fromhex(result.output.strip()[2:])
        expect(len(data)) == 160
        expect(data[128:130]) == b"\x03\x04"

    def fails_on_range_error(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["encode", "uint8", "256"])
        expect(result.exit_code) == 1
        expect("Error:" in result.output) == True

    def fails_on_value_count_mismatch(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["encode", "uint8,uint8", "1"])
        expect(result.exit_code) == 1
        expect("Expected 2 values" in result.output) == True


def describe_decode_command():
    def decodes_as_json(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "uint256,string", STRING_HI, "--json"])
        expect(result.exit_code) == 0
        expect(json.loads(result.output)) == [5, "hi"]

    def decodes_as_table(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "uint256,string", STRING_HI])
        expect(result.exit_code) == 0
        expect('"hi"' in result.output) == True

    def fails_on_truncated_data(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "string", STRING_HI[:66]])
        expect(result.exit_code) == 1
        expect("Error:" in result.output) == True

    def fails_on_bad_hex(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["decode", "uint256", "0xzz"])
        expect(result.exit_code) == 1

    def prints_fixed_point_exactly(expect):
        runner = CliRunner()
        data = "0x" + f"{3 << 127:064x}"
        result = runner.invoke(cli, ["decode", "ufixed128x128", data, "--json"])
        expect(result.exit_code) == 0
        expect(json.loads(result.output)) == ["1.5"]

    def round_trips_fixed_point_through_encode(expect):
        runner = CliRunner()
        data = "0x" + "ff" * 31 + "fd"
        decoded = runner.invoke(cli, ["decode", "ufixed128x128", data, "--json"])
        expect(decoded.exit_code) == 0
        value = json.loads(decoded.output)[0]
        expect("E" in value) == False

        encoded = runner.invoke(cli, ["encode", "ufixed128x128", value])
        expect(encoded.exit_code) == 0
        expect(encoded.output.strip()) == data


def describe_selector_command():
    def prints_selector(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["selector", "transfer(address,uint256)"])
        expect(result.exit_code) == 0
        expect(result.output.strip()) == "0xa9059cbb"

    def fails_with_bad_signature(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["selector", "transfer(address"])
        expect(result.exit_code) == 1


def describe_calldata_command():
    def prints_call_data(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["calldata", "baz(uint32,bool)", "69", "true"])
        expect(result.exit_code) == 0
        expect(result.output.strip()) == "0xcdcd77c0" + f"{69:064x}" + f"{1:064x}"


def describe_main_group():
    def shows_help(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        expect(result.exit_code) == 0
        expect("encode" in result.output) == True
        expect("decode" in result.output) == True

    def accepts_verbose_flag(expect):
        runner = CliRunner()
        result = runner.invoke(cli, ["--verbose", "selector", "f()"])
        expect(result.exit_code) == 0
