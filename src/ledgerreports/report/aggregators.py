"""Ledger aggregators — pure functions from a ledger directory to CSV text."""

from collections import defaultdict
from decimal import Decimal
from pathlib import Path
from typing import Callable

from ledgerreports.domain.enums import ReportKind
from ledgerreports.report.ledger import ZERO, format_amount, read_ledger

Aggregator = Callable[[Path], str]

OUTPUT_FILENAMES: dict[ReportKind, str] = {
    ReportKind.BALANCE: "accounts.csv",
    ReportKind.YEARLY: "yearly.csv",
    ReportKind.STATEMENT: "fs.csv",
}

CASH_ACCOUNT = "Cash"

REVENUE_ACCOUNTS = ("Sales Revenue",)
EXPENSE_ACCOUNTS = (
    "Cost of Goods Sold",
    "Salaries Expense",
    "Rent Expense",
    "Utilities Expense",
    "Interest Expense",
    "Tax Expense",
)
ASSET_ACCOUNTS = (
    "Cash",
    "Accounts Receivable",
    "Inventory",
    "Fixed Assets",
    "Prepaid Expenses",
)
LIABILITY_ACCOUNTS = (
    "Accounts Payable",
    "Loan Payable",
    "Sales Tax Payable",
    "Accrued Liabilities",
    "Unearned Revenue",
    "Dividends Payable",
)
EQUITY_ACCOUNTS = ("Common Stock", "Retained Earnings")

STATEMENT_TAXONOMY: dict[str, dict[str, tuple[str, ...]]] = {
    "Income Statement": {
        "Revenues": REVENUE_ACCOUNTS,
        "Expenses": EXPENSE_ACCOUNTS,
    },
    "Balance Sheet": {
        "Assets": ASSET_ACCOUNTS,
        "Liabilities": LIABILITY_ACCOUNTS,
        "Equity": EQUITY_ACCOUNTS,
    },
}


def _line(label: str, value: Decimal) -> str:
    return f"{label},{format_amount(value)}"


def balance_ledger(source_dir: Path) -> str:
    """Net balance (debit - credit) per account, in first-seen order."""
    balances: dict[str, Decimal] = {}
    for row in read_ledger(source_dir, exclude_name=OUTPUT_FILENAMES[ReportKind.BALANCE]):
        balances[row.account] = balances.get(row.account, ZERO) + row.net

    output = ["Account,Balance"]
    output.extend(_line(account, balance) for account, balance in balances.items())
    return "\n".join(output)


def yearly_cash_summary(source_dir: Path) -> str:
    """Net Cash movement per calendar year, years ascending."""
    cash_by_year: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for row in read_ledger(source_dir, exclude_name=OUTPUT_FILENAMES[ReportKind.YEARLY]):
        if row.account == CASH_ACCOUNT:
            cash_by_year[row.year] += row.net

    output = ["Financial Year,Cash Balance"]
    output.extend(_line(year, cash_by_year[year]) for year in sorted(cash_by_year))
    return "\n".join(output)


def financial_statement(source_dir: Path) -> str:
    """Income statement and balance sheet over the fixed account taxonomy.

    Net income is carried into equity as a synthetic retained-earnings line.
    The closing identity line is informational; an unbalanced ledger is
    rendered as-is.
    """
    balances: dict[str, Decimal] = {
        account: ZERO
        for section in STATEMENT_TAXONOMY.values()
        for group in section.values()
        for account in group
    }
    for row in read_ledger(source_dir, exclude_name=OUTPUT_FILENAMES[ReportKind.STATEMENT]):
        if row.account in balances:
            balances[row.account] += row.net

    def section(accounts: tuple[str, ...]) -> tuple[list[str], Decimal]:
        lines = [_line(account, balances[account]) for account in accounts]
        return lines, sum((balances[a] for a in accounts), ZERO)

    revenue_lines, total_revenue = section(REVENUE_ACCOUNTS)
    expense_lines, total_expenses = section(EXPENSE_ACCOUNTS)
    net_income = total_revenue - total_expenses

    asset_lines, total_assets = section(ASSET_ACCOUNTS)
    liability_lines, total_liabilities = section(LIABILITY_ACCOUNTS)
    equity_lines, total_equity = section(EQUITY_ACCOUNTS)
    total_equity += net_income

    output = ["Basic Financial Statement", "", "Income Statement"]
    output += revenue_lines + expense_lines
    output.append(_line("Net Income", net_income))
    output += ["", "Balance Sheet", "Assets"]
    output += asset_lines
    output.append(_line("Total Assets", total_assets))
    output += ["", "Liabilities"]
    output += liability_lines
    output.append(_line("Total Liabilities", total_liabilities))
    output += ["", "Equity"]
    output += equity_lines
    output.append(_line("Retained Earnings (Net Income)", net_income))
    output.append(_line("Total Equity", total_equity))
    output.append("")
    output.append(
        f"Assets = Liabilities + Equity, {format_amount(total_assets)} = "
        f"{format_amount(total_liabilities + total_equity)}"
    )
    return "\n".join(output)


AGGREGATORS: dict[ReportKind, Aggregator] = {
    ReportKind.BALANCE: balance_ledger,
    ReportKind.YEARLY: yearly_cash_summary,
    ReportKind.STATEMENT: financial_statement,
}
