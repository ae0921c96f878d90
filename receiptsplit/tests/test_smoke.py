"""Public smoke tests for basic module wiring.

Keep these minimal and free of any real-world data.
"""

from __future__ import annotations


def test_imports() -> None:
    import receiptsplit
    import receiptsplit.cli.main
    import receiptsplit.receipt.receipt_parser
    import receiptsplit.runtime
    import receiptsplit.runtime.receipt_server

    assert receiptsplit is not None
    assert receiptsplit.cli.main is not None
    assert receiptsplit.receipt.receipt_parser is not None
    assert receiptsplit.runtime is not None
    assert receiptsplit.runtime.receipt_server.app is not None
