"""Expense categorization and vendor alternative ranking."""
