"""ISO 4217 currencies: (code, symbol, native symbol, name)."""

from typing import List, Tuple

CURRENCIES: List[Tuple[str, str, str, str]] = [
    ("usd", "$", "$", "US Dollar"),
    ("cad", "CA$", "$", "Canadian Dollar"),
    ("eur", "€", "€", "Euro"),
    ("aed", "AED", "د.إ.‏", "United Arab Emirates Dirham"),
    ("ars", "AR$", "$", "Argentine Peso"),
    ("aud", "AU$", "$", "Australian Dollar"),
    ("bgn", "BGN", "лв.", "Bulgarian Lev"),
    ("brl", "R$", "R$", "Brazilian Real"),
    ("chf", "CHF", "CHF", "Swiss Franc"),
    ("clp", "CL$", "$", "Chilean Peso"),
    ("cny", "CN¥", "CN¥", "Chinese Yuan"),
    ("cop", "CO$", "$", "Colombian Peso"),
    ("czk", "Kč", "Kč", "Czech Republic Koruna"),
    ("dkk", "Dkr", "kr", "Danish Krone"),
    ("egp", "EGP", "ج.م.‏", "Egyptian Pound"),
    ("gbp", "£", "£", "British Pound Sterling"),
    ("hkd", "HK$", "$", "Hong Kong Dollar"),
    ("huf", "Ft", "Ft", "Hungarian Forint"),
    ("idr", "Rp", "Rp", "Indonesian Rupiah"),
    ("ils", "₪", "₪", "Israeli New Sheqel"),
    ("inr", "Rs", "টকা", "Indian Rupee"),
    ("isk", "Ikr", "kr", "Icelandic Króna"),
    ("jpy", "¥", "￥", "Japanese Yen"),
    ("krw", "₩", "₩", "South Korean Won"),
    ("mxn", "MX$", "$", "Mexican Peso"),
    ("myr", "RM", "RM", "Malaysian Ringgit"),
    ("ngn", "₦", "₦", "Nigerian Naira"),
    ("nok", "Nkr", "kr", "Norwegian Krone"),
    ("nzd", "NZ$", "$", "New Zealand Dollar"),
    ("php", "₱", "₱", "Philippine Peso"),
    ("pln", "zł", "zł", "Polish Zloty"),
    ("ron", "RON", "RON", "Romanian Leu"),
    ("rub", "RUB", "₽.", "Russian Ruble"),
    ("sar", "SR", "ر.س.‏", "Saudi Riyal"),
    ("sek", "Skr", "kr", "Swedish Krona"),
    ("sgd", "S$", "$", "Singapore Dollar"),
    ("thb", "฿", "฿", "Thai Baht"),
    ("try", "TL", "TL", "Turkish Lira"),
    ("twd", "NT$", "NT$", "New Taiwan Dollar"),
    ("uah", "₴", "₴", "Ukrainian Hryvnia"),
    ("vnd", "₫", "₫", "Vietnamese Dong"),
    ("zar", "R", "R", "South African Rand"),
]


def currency_rows() -> List[dict]:
    """Rows ready for bulk insert into `currencies`."""
    return [
        {"code": code, "symbol": symbol, "symbol_native": native, "name": name}
        for code, symbol, native, name in CURRENCIES
    ]
