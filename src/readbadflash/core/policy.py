"""Operator-driven resolution of chunk read errors."""

import sys

from ..core.types import Decision, RecoveryMode
from ..exceptions import PromptInputError

PROMPT = (
    'Retry? Please enter "y" to retry (default), "n" to fill with zeros, '
    'or "z" to always fill with zeros [Ynz]: '
)


class RecoveryPolicy:
    """Decides what to do with a chunk that could not be read.

    Until the operator chooses "always fill with zeros", every read error is turned into a
    prompt. After that choice the policy stays in ``RecoveryMode.ALWAYS_ZERO_FILL`` and
    answers without asking.

    Args:
        input_stream: text stream operator answers are read from. Defaults to ``sys.stdin``.
        output_stream: text stream the prompt is written to. Defaults to ``sys.stdout``.
        mode: initial recovery mode.
    """

    def __init__(self, input_stream=None, output_stream=None, mode=RecoveryMode.ASK_EACH_TIME):
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.mode = mode

    @property
    def always_zero_fill(self) -> bool:
        return self.mode is RecoveryMode.ALWAYS_ZERO_FILL

    def decide(self) -> Decision:
        """Resolve the read error of the current chunk.

        Raises:
            PromptInputError: if the operator's answer cannot be read.
        """
        if self.always_zero_fill:
            return Decision.ZERO_FILL

        answer = self._ask()
        choice = answer[:1].lower()
        if choice == 'z':
            self.mode = RecoveryMode.ALWAYS_ZERO_FILL
            return Decision.ZERO_FILL
        if choice == 'n':
            return Decision.ZERO_FILL
        return Decision.RETRY

    def _ask(self) -> str:
        input_stream = self.input_stream or sys.stdin
        output_stream = self.output_stream or sys.stdout
        print(PROMPT, end='', file=output_stream, flush=True)
        try:
            line = input_stream.readline()
        except (OSError, ValueError) as e:
            raise PromptInputError() from e
        # readline() gives '' only at end of stream, an empty answer is '\n'
        if not line:
            raise PromptInputError()
        return line
