import json
import os

import pytest

from vanity.core import PersistenceError
from vanity.publisher import ResultPublisher, SearchResult, format_json_compact_array


def make_result(candidate, iterations=10, elapsed=2.0, expected=29):
    return SearchResult(candidate=candidate, iterations=iterations,
                        elapsed_seconds=elapsed, expected_iterations=expected)


def test_statistics():
    result = make_result(None, iterations=10, elapsed=2.0, expected=29)

    assert result.iterations_per_second == pytest.approx(5.0)
    assert result.luck_factor == pytest.approx(2.9)
    assert result.luck_label == "better"


def test_unlucky_search():
    result = make_result(None, iterations=58, expected=29)

    assert result.luck_factor == pytest.approx(0.5)
    assert result.luck_label == "worse"
    assert ResultPublisher.format_luck(result) == "0.50x worse than expected"


def test_zero_elapsed_rate():
    assert make_result(None, elapsed=0.0).iterations_per_second == 0.0


def test_json_output_parses_back(mnemonic_candidate):
    result = make_result(mnemonic_candidate)
    publisher = ResultPublisher("json")

    document = json.loads(publisher.format_console(result))

    assert document == publisher.build_output(result)
    assert document["mnemonic"] == mnemonic_candidate.mnemonic
    assert document["public_key"] == mnemonic_candidate.address
    assert document["secret_key"] == mnemonic_candidate.secret_key_b58
    assert len(document["keypair_json"]) == 64
    assert document["statistics"]["iterations"] == 10
    assert document["statistics"]["expected_iterations"] == 29


def test_keypair_array_stays_on_one_line(fast_candidate):
    text = format_json_compact_array(ResultPublisher.build_output(make_result(fast_candidate)))

    keypair_lines = [line for line in text.splitlines() if '"keypair_json"' in line]
    assert len(keypair_lines) == 1
    assert keypair_lines[0].strip().endswith("],")
    # The rest of the document is still indented
    assert '\n  "public_key"' in text


def test_fast_mode_omits_mnemonic(fast_candidate):
    result = make_result(fast_candidate)

    assert "mnemonic" not in ResultPublisher.build_output(result)
    assert "Mnemonic:" not in ResultPublisher("text").format_console(result)


def test_text_console(mnemonic_candidate):
    lines = ResultPublisher("text").format_console(make_result(mnemonic_candidate)).splitlines()

    assert lines[0] == f"Mnemonic: {mnemonic_candidate.mnemonic}"
    assert lines[1] == f"Public Key: {mnemonic_candidate.address}"
    assert lines[2] == f"Secret Key: {mnemonic_candidate.secret_key_b58}"
    assert lines[3].startswith("Keypair JSON: [")


def test_summary(fast_candidate):
    summary = ResultPublisher.format_summary(make_result(fast_candidate))

    assert summary.startswith("🎉 SUCCESS!")
    assert "Total iterations: 10" in summary
    assert "Time elapsed: 2.0s" in summary
    assert "Luck factor: 2.90x better than expected" in summary


def test_text_file_has_statistics(fast_candidate):
    content = ResultPublisher("text").format_file(make_result(fast_candidate))

    assert content.startswith("Solana Vanity Wallet Generated\n")
    assert f"Public Key: {fast_candidate.address}" in content
    assert "Statistics:" in content
    assert "Expected iterations: 29" in content


def test_file_names(fast_candidate):
    result = make_result(fast_candidate)
    prefix = fast_candidate.address[:10]

    assert ResultPublisher("text").file_name(result) == f"{prefix}_output.txt"
    assert ResultPublisher("json").file_name(result) == f"{prefix}_output.json"


def test_save_writes_owner_only_file(tmp_path, fast_candidate):
    result = make_result(fast_candidate)
    publisher = ResultPublisher("json", str(tmp_path / "out"))

    path = publisher.save(result)

    assert os.path.dirname(path) == str(tmp_path / "out")
    with open(path) as f:
        assert json.load(f)["public_key"] == fast_candidate.address
    if os.name == "posix":
        assert os.stat(path).st_mode & 0o777 == 0o600


def test_save_failure_raises_persistence_error(tmp_path, fast_candidate):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")

    with pytest.raises(PersistenceError):
        ResultPublisher("text", str(blocker)).save(make_result(fast_candidate))
