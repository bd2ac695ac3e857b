# This project was developed with assistance from AI tools.
"""Exception types raised by the calculation core and knowledge lookups."""


class CalculationError(Exception):
    """Base class for calculation failures."""


class DomainError(CalculationError, ValueError):
    """A numeric input is outside the range the formulas are defined for."""


class InsufficientInputsError(CalculationError):
    """Not enough resolved fields to compute a payment."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(f"Missing inputs: {', '.join(self.missing)}")


class KnowledgeDataError(ValueError):
    """The knowledge dataset is malformed."""


class PaymentParseError(CalculationError):
    """No parse engine produced valid inputs with enough confidence."""

    def __init__(self, chain: list):
        self.chain = chain
        super().__init__("Could not confidently parse inputs. Try adding $, %, and years.")
