# -*- coding: utf-8 -*-
# smartspend/ui/messages.py
# Reply texts. HTML parse mode, so anything the user typed goes through escape().
from __future__ import annotations

from datetime import date
from decimal import Decimal
from html import escape
from typing import Sequence

from smartspend.models.records import Category, Expense
from smartspend.services.amount import format_amount
from smartspend.services.periods import month_title, short_day
from smartspend.services.reports import Summary

TELEGRAM_CHUNK = 4000

GENERIC_FAILURE = "❌ Sorry, something went wrong. Please try again."


def _bullets(categories: Sequence[Category]) -> list[str]:
    return [f"• {escape(c.name)} {c.emoji}" for c in categories]


def welcome(first_name: str | None, categories: Sequence[Category]) -> str:
    hello = f"👋 Welcome to SmartSpend Tracker{', ' + escape(first_name) if first_name else ''}!"
    lines = [hello, "", "🏷️ <b>Available Categories:</b>", *_bullets(categories), ""]
    lines += [
        "💡 Just text me expenses like:",
        "• <code>Coffee $5.50</code>",
        "• <code>Uber $15</code>",
        "• <code>Groceries 89.45</code>",
        "",
        "📝 <b>Commands:</b>",
        "• <code>add category [name]</code> - Add new category",
        "• <code>show categories</code> - View all categories",
        "• <code>change [ID] to [category]</code> - Edit expense category",
        "• <code>delete [ID]</code> - Delete expense",
        "• <code>summary</code> - Monthly summary",
        "• <code>summary for last X months</code> - Multi-month summary",
        "• <code>show all expenses</code> - List all expenses",
        "• <code>help</code> - Show all commands",
        "",
        "Ready to track your expenses! 🚀",
    ]
    return "\n".join(lines)


HELP_TEXT = (
    "🤖 <b>SmartSpend Tracker Help</b>\n\n"
    "💰 <b>Adding Expenses:</b>\n"
    "• <code>Coffee $5.50</code> or <code>Coffee 5.50</code>\n"
    "• <code>$15 Uber</code> or <code>15 Uber</code>\n"
    "• <code>Spent $25 on groceries</code>\n\n"
    "✏️ <b>Managing Expenses:</b>\n"
    "• <code>change 0001 to shopping</code> - Change category\n"
    "• <code>delete 0001</code> - Delete expense\n\n"
    "🏷️ <b>Categories:</b>\n"
    "• <code>add category Investments</code> - Add new category\n"
    "• <code>show categories</code> - View all categories\n\n"
    "📊 <b>Reports:</b>\n"
    "• <code>summary</code> - This month's summary\n"
    "• <code>summary for last 3 months</code> - Multi-month summary\n"
    "• <code>show all expenses</code> - List all expenses for this month\n\n"
    "Each expense gets a unique ID (like 0001) that you can use to edit or delete it.\n\n"
    "Happy tracking! 💸"
)

UNKNOWN_TEXT = (
    "❓ I didn't understand that message.\n\n"
    "Try:\n"
    "• <code>Coffee $5.50</code> to add an expense\n"
    "• <code>summary</code> for monthly summary\n"
    "• <code>help</code> for all commands"
)


def rejected(violations: Sequence[str]) -> str:
    return "❌ " + ", ".join(violations)


def expense_added(expense: Expense, category: Category) -> str:
    return (
        f"✅ Added: {escape(expense.name)} - ${format_amount(expense.amount)} "
        f"({escape(category.name)} {category.emoji}) [ID: {expense.unique_key}]"
    )


def category_changed(expense: Expense, category: Category) -> str:
    return f"✅ Updated: {escape(expense.name)} category changed to {escape(category.name)} {category.emoji}"


def expense_deleted(expense: Expense) -> str:
    return f"✅ Deleted: {escape(expense.name)} - ${format_amount(expense.amount)}"


def expense_not_found(key: str) -> str:
    return f"❌ Expense {escape(key)} not found."


def category_not_found(name: str) -> str:
    return (
        f"❌ Category \"{escape(name)}\" not found. "
        "Use <code>show categories</code> to see available categories."
    )


def category_exists(name: str) -> str:
    return f"❌ Category \"{escape(name)}\" already exists."


def category_added(category: Category) -> str:
    return f"✅ Added new category: {escape(category.name)} {category.emoji}"


def categories_list(categories: Sequence[Category]) -> str:
    defaults = [c for c in categories if c.is_default]
    custom = [c for c in categories if not c.is_default]
    lines = ["🏷️ <b>Your Categories:</b>", ""]
    if defaults:
        lines.append("<b>Default Categories:</b>")
        lines += _bullets(defaults)
    if custom:
        lines += ["", "<b>Custom Categories:</b>"]
        lines += _bullets(custom)
    lines += ["", "💡 Add new categories with: <code>add category [name]</code>"]
    return "\n".join(lines)


def summary_title(ref: date, months: int | None = None) -> str:
    """None = the plain "summary" command; any N = "summary for last N months"."""
    if months is None:
        return f"📊 {month_title(ref)} Summary"
    return f"📈 Last {months} Month{'s' if months > 1 else ''} Summary"


def summary(report: Summary, title: str) -> str:
    if report.is_empty:
        return "📊 No expenses found for this period."
    lines = [title, "", f"<b>Total: ${format_amount(report.total)}</b>", ""]
    for line in report.lines:
        lines.append(f"{line.emoji} {escape(line.name)}: ${format_amount(line.total)} ({line.share}%)")
    top = report.biggest
    if top is not None:
        lines += ["", f"🎯 <b>Biggest Category:</b> {escape(top.name)} (${format_amount(top.total)})"]
    return "\n".join(lines)


def expenses_list(expenses: Sequence[Expense], ref: date) -> str:
    if not expenses:
        return "📝 No expenses found for this month."
    lines = [f"📝 <b>{month_title(ref)} Expenses:</b>", ""]
    for e in expenses:
        cat = escape(e.category_name or "Uncategorized")
        lines.append(
            f"[{e.unique_key}] {escape(e.name)} - ${format_amount(e.amount)} ({cat}) - {short_day(e.date)}"
        )
    total = sum((e.amount for e in expenses), Decimal("0.00"))
    lines += ["", f"<b>Total: ${format_amount(total)}</b>"]
    return "\n".join(lines)


def split_message(text: str, limit: int = TELEGRAM_CHUNK) -> list[str]:
    """
    Cut on line boundaries so HTML tags opened on a line stay closed in the
    same chunk; a single line longer than the limit is hard-cut.
    """
    if len(text) <= limit:
        return [text]
    chunks: list[str] = []
    buf = ""
    for line in text.split("\n"):
        while len(line) > limit:
            if buf:
                chunks.append(buf)
                buf = ""
            chunks.append(line[:limit])
            line = line[limit:]
        candidate = f"{buf}\n{line}" if buf else line
        if len(candidate) > limit:
            chunks.append(buf)
            buf = line
        else:
            buf = candidate
    if buf:
        chunks.append(buf)
    return chunks
