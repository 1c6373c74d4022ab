"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
Size conversions for the --chunk-size option and the run summary.
"""
import re

# Binary multipliers; a trailing 'B' is optional ('64K' == '64KB')
_MULTIPLIERS = {"": 1, "K": 1024, "M": 1024 ** 2, "G": 1024 ** 3}
_SIZE_RE = re.compile(r"(-?)(\d+(?:\.\d*)?|\.\d+)\s*([KMG]?)B?")

_DISPLAY_UNITS = ("B", "KB", "MB", "GB", "TB")


class ConvertUtils:
    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert a byte count to a summary string (e.g., 1.50KB, 3.20MB).
        """
        if size_bytes < 0:
            return "0B"

        value = float(size_bytes)
        for unit in _DISPLAY_UNITS:
            if value < 1024 or unit == _DISPLAY_UNITS[-1]:
                return f"{value:.2f}{unit}"
            value /= 1024

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert a human-readable size ('64K', '1.5M', '4096', '1GB') to bytes.
        Raises ValueError for negative sizes or invalid formats.
        """
        text = size_str.strip().upper()
        match = _SIZE_RE.fullmatch(text)
        if match is None:
            raise ValueError(
                f"Invalid size format: '{text}'. "
                f"Supported formats: 64K, 64KB, 1.5M, 4096, 1G, etc."
            )

        sign, number, unit = match.groups()
        if sign:
            raise ValueError(f"Negative size not allowed: '{text}'")
        return int(float(number) * _MULTIPLIERS[unit])
