import io

import pytest
from Crypto.Cipher import AES as RefAES

from cryptpipe import __version__
from cryptpipe.cli import main

ZERO_KEY = "\x00" * 16
DEFAULT_IV = b"0123456789abcdef"


def run(capsysbinary, argv):
    code = main(argv)
    captured = capsysbinary.readouterr()
    return code, captured.out, captured.err.decode()


@pytest.fixture
def infile(tmp_path):
    def make(data: bytes, name: str = "in.bin") -> str:
        path = tmp_path / name
        path.write_bytes(data)
        return str(path)

    return make


# ================================================================
# Usage errors
# ================================================================


def test_missing_key_prints_usage(capsysbinary, infile):
    code, out, err = run(capsysbinary, [infile(b"data")])

    assert code == 1
    assert out == b""
    assert "No key specified" in err
    assert "usage:" in err
    assert "--key" in err


def test_too_many_files(capsysbinary, infile):
    argv = ["--key", ZERO_KEY, infile(b"a", "a.bin"), infile(b"b", "b.bin")]
    code, out, err = run(capsysbinary, argv)

    assert code == 1
    assert out == b""
    assert "Too many files specified" in err


def test_unknown_mode(capsysbinary, infile):
    code, _, err = run(capsysbinary, ["--key", ZERO_KEY, "--mode", "gcm", infile(b"x")])

    assert code == 1
    assert "Invalid mode" in err


def test_bad_key_length(capsysbinary, infile):
    code, _, err = run(capsysbinary, ["--key", "short", infile(b"x")])

    assert code == 1
    assert "Could not create aes instance" in err


def test_bad_iv_length_for_cbc(capsysbinary, infile):
    argv = ["--key", ZERO_KEY, "--mode", "cbc", "--initial-value", "abc", infile(b"x")]
    code, _, err = run(capsysbinary, argv)

    assert code == 1
    assert "Invalid IV size" in err


def test_missing_input_file(capsysbinary, tmp_path):
    missing = str(tmp_path / "missing.bin")
    code, out, err = run(capsysbinary, ["--key", ZERO_KEY, missing])

    assert code == 1
    assert out == b""
    assert f"Cannot open {missing}" in err


def test_parser_errors_exit_with_one(capsysbinary):
    with pytest.raises(SystemExit) as exc:
        main(["--key"])

    assert exc.value.code == 1


def test_version_flag(capsysbinary):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])

    assert exc.value.code == 0
    assert __version__ in capsysbinary.readouterr().out.decode()


# ================================================================
# Transform scenarios
# ================================================================


def test_cbc_roundtrip_scenario(capsysbinary, infile):
    pt = b"\xaa" * 32
    argv = ["--key", ZERO_KEY, "--mode", "cbc", "--initial-value", "0123456789abcdef"]

    code, ct, _ = run(capsysbinary, argv + [infile(pt)])
    assert code == 0
    assert ct == RefAES.new(b"\x00" * 16, RefAES.MODE_CBC, iv=DEFAULT_IV).encrypt(pt)

    code, back, _ = run(capsysbinary, argv + ["--decrypt", infile(ct, "ct.bin")])
    assert code == 0
    assert back == pt


def test_ecb_identical_blocks(capsysbinary, infile):
    code, ct, _ = run(capsysbinary, ["--key", ZERO_KEY, infile(b"Z" * 32)])

    assert code == 0
    assert len(ct) == 32
    assert ct[:16] == ct[16:]


def test_cbc_uses_default_initial_value(capsysbinary, infile):
    pt = bytes(range(48))
    code, ct, _ = run(capsysbinary, ["--key", ZERO_KEY, "--mode", "cbc", infile(pt)])

    assert code == 0
    assert ct == RefAES.new(b"\x00" * 16, RefAES.MODE_CBC, iv=DEFAULT_IV).encrypt(pt)


def test_partial_block_is_zero_padded(capsysbinary, infile):
    pt = b"attack at dawn"
    code, ct, _ = run(capsysbinary, ["--key", ZERO_KEY, "--mode", "cbc", infile(pt)])
    assert code == 0
    assert len(ct) == 16

    argv = ["--key", ZERO_KEY, "--mode", "cbc", "--decrypt", infile(ct, "ct.bin")]
    code, back, _ = run(capsysbinary, argv)
    assert back == pt + b"\x00\x00"


@pytest.mark.parametrize("mode", ["cfb", "ofb", "ctr"])
def test_stream_modes_roundtrip_without_padding(capsysbinary, infile, mode):
    pt = b"not a multiple of sixteen"
    base = ["--key", ZERO_KEY, "--mode", mode]

    code, ct, _ = run(capsysbinary, base + [infile(pt)])
    assert code == 0
    assert len(ct) == len(pt)

    code, back, _ = run(capsysbinary, base + ["--decrypt", infile(ct, "ct.bin")])
    assert code == 0
    assert back == pt


def test_reads_standard_input(capsysbinary, monkeypatch):
    pt = b"\x01" * 16
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(pt)))

    code, ct, _ = run(capsysbinary, ["--key", ZERO_KEY])

    assert code == 0
    assert ct == RefAES.new(b"\x00" * 16, RefAES.MODE_ECB).encrypt(pt)


def test_empty_input_gives_empty_output(capsysbinary, infile):
    code, out, _ = run(capsysbinary, ["--key", ZERO_KEY, "--mode", "cbc", infile(b"")])

    assert code == 0
    assert out == b""


# ================================================================
# Configuration
# ================================================================


def test_config_file_supplies_defaults(capsysbinary, infile, tmp_path):
    cfg = tmp_path / "cryptpipe.toml"
    cfg.write_text(
        "[general]\nmode = 'cbc'\ninitial_value = 'fedcba9876543210'\n",
        encoding="utf-8",
    )
    pt = b"\x42" * 32

    code, ct, _ = run(capsysbinary, ["--key", ZERO_KEY, infile(pt)])

    ref = RefAES.new(b"\x00" * 16, RefAES.MODE_CBC, iv=b"fedcba9876543210")
    assert code == 0
    assert ct == ref.encrypt(pt)


def test_command_line_overrides_config(capsysbinary, infile, tmp_path):
    cfg = tmp_path / "custom.json"
    cfg.write_text('{"general": {"mode": "cbc"}}', encoding="utf-8")
    pt = b"\x42" * 32

    argv = ["--config", str(cfg), "--key", ZERO_KEY, "--mode", "ecb", infile(pt)]
    code, ct, _ = run(capsysbinary, argv)

    assert code == 0
    assert ct == RefAES.new(b"\x00" * 16, RefAES.MODE_ECB).encrypt(pt)


def test_missing_explicit_config(capsysbinary, infile, tmp_path):
    argv = ["--config", str(tmp_path / "nope.toml"), "--key", ZERO_KEY, infile(b"x")]
    code, _, err = run(capsysbinary, argv)

    assert code == 1
    assert "Invalid configuration" in err


def test_invalid_config_content(capsysbinary, infile, tmp_path):
    (tmp_path / "cryptpipe.toml").write_text("[general]\nchunk_size = 0\n")

    code, _, err = run(capsysbinary, ["--key", ZERO_KEY, infile(b"x")])

    assert code == 1
    assert "chunk_size" in err


@pytest.mark.parametrize(
    "content",
    ["[general.debug]\nlog_level = 10\n", "[general]\ndebug = true\n"],
)
def test_wrong_typed_log_setting_reported(capsysbinary, infile, tmp_path, content):
    cfg = tmp_path / "settings.toml"
    cfg.write_text(content, encoding="utf-8")

    argv = ["--key", ZERO_KEY, "--config", str(cfg), infile(b"x")]
    code, out, err = run(capsysbinary, argv)

    assert code == 1
    assert out == b""
    assert "Invalid configuration" in err


def test_missing_explicit_config_skips_local_file(capsysbinary, infile, tmp_path):
    (tmp_path / "cryptpipe.toml").write_text("[general]\nmode = 'cbc'\n")
    missing = tmp_path / "nope.toml"

    argv = ["--config", str(missing), "--key", ZERO_KEY, infile(b"x")]
    code, out, err = run(capsysbinary, argv)

    assert code == 1
    assert out == b""
    assert "Invalid configuration" in err
    assert "nope.toml" in err
