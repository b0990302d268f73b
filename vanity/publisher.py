"""
Formatting of the winning candidate and its statistics.

Builds the console summary, the console result and the file payload in
either text or JSON form, then hands the file payload to
helpers.data_utils for writing.
"""

import json
import logging
import re
from dataclasses import dataclass

from helpers.data_utils import save_output_file
from vanity.core import DEFAULT_OUTPUT_DIR, PersistenceError
from vanity.keygen import Candidate
from vanity.utils import format_duration, format_number

logger = logging.getLogger(__name__)

_KEYPAIR_ARRAY_RE = re.compile(r'"keypair_json": \[\s*([0-9,\s]+?)\s*\]')


@dataclass
class SearchResult:
    """Winning candidate plus the statistics captured at the moment of the match."""
    candidate: Candidate
    iterations: int
    elapsed_seconds: float
    expected_iterations: int

    @property
    def iterations_per_second(self) -> float:
        if self.elapsed_seconds <= 0:
            return 0.0
        return self.iterations / self.elapsed_seconds

    @property
    def luck_factor(self) -> float:
        """expected / actual; above 1 means the search beat the average."""
        if self.iterations <= 0:
            return float(self.expected_iterations)
        return self.expected_iterations / self.iterations

    @property
    def luck_label(self) -> str:
        return "better" if self.iterations < self.expected_iterations else "worse"


def format_json_compact_array(output: dict) -> str:
    """Pretty-print the document but keep keypair_json on one line."""
    pretty = json.dumps(output, indent=2)

    def _collapse(match):
        numbers = [n.strip() for n in match.group(1).split(',') if n.strip()]
        return f'"keypair_json": [{", ".join(numbers)}]'

    return _KEYPAIR_ARRAY_RE.sub(_collapse, pretty)


class ResultPublisher:
    """Renders a SearchResult and writes it to the output directory."""

    def __init__(self, output_format: str = "text", output_dir: str = DEFAULT_OUTPUT_DIR):
        self.output_format = output_format
        self.output_dir = output_dir

    @staticmethod
    def build_output(result: SearchResult) -> dict:
        candidate = result.candidate
        output = {}
        if candidate.mnemonic is not None:
            output["mnemonic"] = candidate.mnemonic
        output.update({
            "public_key": candidate.address,
            "secret_key": candidate.secret_key_b58,
            "keypair_json": candidate.keypair_json,
            "statistics": {
                "iterations": result.iterations,
                "elapsed_seconds": result.elapsed_seconds,
                "iterations_per_second": result.iterations_per_second,
                "expected_iterations": result.expected_iterations,
                "luck_factor": result.luck_factor
            }
        })
        return output

    @staticmethod
    def format_luck(result: SearchResult) -> str:
        return f"{result.luck_factor:.2f}x {result.luck_label} than expected"

    @staticmethod
    def format_summary(result: SearchResult) -> str:
        lines = [
            "🎉 SUCCESS! Vanity wallet generated!",
            "====================================",
            f"Total iterations: {format_number(result.iterations)}",
            f"Time elapsed: {format_duration(result.elapsed_seconds)}",
            f"Average rate: {format_number(result.iterations_per_second)}/s",
            f"Luck factor: {ResultPublisher.format_luck(result)}",
        ]
        return "\n".join(lines)

    @staticmethod
    def _key_lines(candidate: Candidate) -> list:
        lines = []
        if candidate.mnemonic is not None:
            lines.append(f"Mnemonic: {candidate.mnemonic}")
        keypair = ", ".join(str(b) for b in candidate.keypair_json)
        lines.extend([
            f"Public Key: {candidate.address}",
            f"Secret Key: {candidate.secret_key_b58}",
            f"Keypair JSON: [{keypair}]",
        ])
        return lines

    def format_console(self, result: SearchResult) -> str:
        if self.output_format == "json":
            return format_json_compact_array(self.build_output(result))
        return "\n".join(self._key_lines(result.candidate))

    def format_file(self, result: SearchResult) -> str:
        if self.output_format == "json":
            return format_json_compact_array(self.build_output(result))

        lines = ["Solana Vanity Wallet Generated", "=============================="]
        lines.extend(self._key_lines(result.candidate))
        lines.extend([
            "",
            "Statistics:",
            "-----------",
            f"Total iterations: {format_number(result.iterations)}",
            f"Time elapsed: {format_duration(result.elapsed_seconds)}",
            f"Average rate: {format_number(result.iterations_per_second)}/s",
            f"Expected iterations: {format_number(result.expected_iterations)}",
            f"Luck factor: {self.format_luck(result)}",
        ])
        return "\n".join(lines) + "\n"

    def file_name(self, result: SearchResult) -> str:
        extension = "json" if self.output_format == "json" else "txt"
        return f"{result.candidate.address[:10]}_output.{extension}"

    def save(self, result: SearchResult) -> str:
        """Write the file payload and return its path. Raises PersistenceError on failure."""
        try:
            return save_output_file(self.format_file(result), self.file_name(result), self.output_dir)
        except OSError as e:
            raise PersistenceError(f"Could not save result to {self.output_dir}: {e}") from e
