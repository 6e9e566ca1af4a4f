"""
Shared test fixtures for ibex-parser tests.

All raw exports are synthetic and written to ``tmp_path``. The default
layout produced by ``write_export`` matches ``ParserConfig()``::

    lines 0-5    header
    line  6      index line (IBEX 35)
    lines 7-10   header
    lines 11..   one line per stock
    last 5       trailer

With the 35 default stocks this is exactly 51 lines.
"""

from __future__ import annotations

from pathlib import Path

import pytest

DEFAULT_DATE = "06/02/2024"
DEFAULT_TIME = "15:00:00"

IBEX_STOCKS = [
    "ACCIONA", "ACCIONA ENER", "ACERINOX", "ACS", "AENA", "AMADEUS",
    "ARCELORMIT.", "B.SABADELL", "B.SANTANDER", "BANKINTER", "BBVA",
    "CAIXABANK", "CELLNEX", "ENAGAS", "ENDESA", "FERROVIAL", "FLUIDRA",
    "GRIFOLS", "IAG", "IBERDROLA", "INDITEX", "INDRA A", "INM.COLONIAL",
    "LOGISTA", "MAPFRE", "MELIA HOTELS", "MERLIN", "NATURGY", "REDEIA",
    "REPSOL", "ROVI", "SACYR", "SOLARIA", "TELEFONICA", "UNICAJA",
]

HEADER = [
    "Mercados y Cotizaciones",
    "Acciones",
    "IBEX 35®",
    "Precios",
    "Nombre\tAnterior\tÚltimo\t% Dif.\tMáx.\tMín.\tFecha\tHora",
    "",
]
HEADER_AFTER_INDEX = [
    "",
    "Valores",
    "Consulta de precios",
    "Nombre\tÚltimo\t% Dif.\tMáx.\tMín.\tVolumen\tEfectivo (miles €)\tFecha\tHora",
]
TRAILER = [
    "",
    "Datos con 15 minutos de retraso",
    "Aviso legal",
    "Política de privacidad",
    "© BME",
]


def index_line(date: str = DEFAULT_DATE, time: str = DEFAULT_TIME) -> str:
    """Raw index line: name, last, % change, max, min, date, time."""
    return "\t".join(["IBEX 35", "10.050,30", "0,52", "10.080,10", "9.990,40", date, time])


def stock_line(name: str, date: str = DEFAULT_DATE, time: str = DEFAULT_TIME) -> str:
    """Raw stock line: name, last, % change, max, min, volume, value, date, time."""
    return "\t".join(
        [name, "3,7420", "0,31", "3,7500", "3,7000", "12.825.738", "47.876,71", date, time]
    )


def build_export(
    stocks: dict[str, str] | list[str] | None = None,
    date: str = DEFAULT_DATE,
    index_time: str = DEFAULT_TIME,
) -> list[str]:
    """Build the lines of a raw export.

    *stocks* maps name -> time (a plain list uses DEFAULT_TIME for all).
    """
    if stocks is None:
        stocks = IBEX_STOCKS
    if not isinstance(stocks, dict):
        stocks = {name: DEFAULT_TIME for name in stocks}
    body = [stock_line(name, date, time) for name, time in stocks.items()]
    return [*HEADER, index_line(date, index_time), *HEADER_AFTER_INDEX, *body, *TRAILER]


@pytest.fixture()
def build_lines():
    """The ``build_export`` helper, for tests that edit lines before writing."""
    return build_export


@pytest.fixture()
def stocks_with():
    """Factory: the default stocks at DEFAULT_TIME, with some times overridden."""

    def _stocks(**times: str) -> dict[str, str]:
        stocks = {name: DEFAULT_TIME for name in IBEX_STOCKS}
        stocks.update(times)
        return stocks

    return _stocks


@pytest.fixture()
def write_export(tmp_path):
    """Factory fixture: write a raw export and return its path."""

    def _write(name: str = "data_ibex.csv", lines: list[str] | None = None, **kwargs) -> Path:
        if lines is None:
            lines = build_export(**kwargs)
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def valid_export(write_export) -> Path:
    """A full default export: 35 stocks, all at DEFAULT_TIME."""
    return write_export()


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs the full batch driver)",
    )
