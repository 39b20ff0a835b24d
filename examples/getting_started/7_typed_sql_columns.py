"""
Typed column access - read SQL results by column name with NULL defaults.
"""

import sys
import os
import sqlite3
from datetime import datetime
from decimal import Decimal
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from ai_api_toolkit import ColumnReader

conn = sqlite3.connect(":memory:")
conn.execute("CREATE TABLE invoices (number TEXT, amount TEXT, paid INTEGER, due TEXT)")
conn.executemany("INSERT INTO invoices VALUES (?, ?, ?, ?)", [
    ("INV-001", "1250.00", 1, "2024-05-01"),
    ("INV-002", "89.90", 0, None),
])

reader = ColumnReader(conn.execute("SELECT * FROM invoices"))
for row in reader:
    number = row.get("number", str)
    amount = row.get("amount", Decimal)
    paid = row.get("paid", bool, default=False)
    due = row.get("due", datetime)
    print(f"{number}: {amount} paid={paid} due={due.date() if due else 'n/a'}")
