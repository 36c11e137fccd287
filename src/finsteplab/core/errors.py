"""
Error classes for FinStepLab.

This module defines custom exception classes used throughout the FinStepLab system
for handling configuration errors, malformed transfer specifications, failed numeric
checks and programming-contract violations.
"""


class ConfigError(Exception):
    """
    Configuration error during scenario setup or simulation.

    This exception is raised when the household model cannot be represented or is
    ill-defined. Configuration errors are always fatal: continuing would silently
    fabricate numbers.

    **Common Causes:**
    - An expense whose `from_stream` names no Transfer
    - A transfer spec referencing an unknown income, asset or liability
    - Missing tax tables for a jurisdiction or year
    - Actuarial lookups beyond the end of the life table
    - A spouse row without birth date or sex

    **Example Usage:**
        ```python
        from finsteplab.core.errors import ConfigError
        from finsteplab.model import Scenario

        try:
            scenario = Scenario({"name": "Default", "type": "scenario"}, rows, 2080)
        except ConfigError as e:
            print(f"Configuration error: {e}")
        ```
    """

    pass


class TransferSpecError(ConfigError):
    """
    A transfer routing specification could not be parsed or bound.

    Raised at item-construction or bind time, with the offending transfer's
    name in the message.
    """

    pass


class TaggedValueError(ConfigError, ValueError):
    """A number failed the range/modulus check of its tagged numeric type."""

    pass


class ContractError(RuntimeError):
    """
    A programming-contract violation.

    Raised unconditionally and never recovered: resetting an item's
    `temporal` back-reference, reading it before it was set, or resuming a
    stepper out of sequence.
    """

    pass
