import re

CEP_SEPARATOR = "-"
CEP_PATTERN = re.compile(r"[0-9]{8}")


def normalize_cep(cep: str) -> str:
    """Removes a single optional separator from a raw CEP string.

        Only one literal separator is removed, wherever it appears, so
        '01310-100' and '01-310100' both normalize to '01310100' while
        '01-310-100' keeps its second separator and later fails validation.

        Args:
            cep: The raw CEP string, as received in the request path.

        Returns:
            The CEP with its first separator removed.
    """
    return cep.replace(CEP_SEPARATOR, "", 1)


def is_valid_cep(cep: str) -> bool:
    """Checks whether a raw CEP string is exactly 8 ASCII digits once normalized.

        Args:
            cep: The raw CEP string.

        Returns:
            True if the normalized CEP is 8 decimal digits, False otherwise
            (empty, wrong length, embedded whitespace or any non-digit character).

        Example:
            >>> is_valid_cep("01310-100")
            True
            >>> is_valid_cep("0131010a")
            False
    """
    return CEP_PATTERN.fullmatch(normalize_cep(cep)) is not None


def celsius_to_fahrenheit(temp_c: float) -> float:
    """Converts a Celsius temperature to Fahrenheit (C * 1.8 + 32), without rounding."""
    return temp_c * 1.8 + 32


def celsius_to_kelvin(temp_c: float) -> float:
    """Converts a Celsius temperature to Kelvin (C + 273.15), without rounding."""
    return temp_c + 273.15
