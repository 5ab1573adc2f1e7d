"""
Marketplace app - orders and payment transactions.

The marketplace owns the records the ledger reads: an Order placed by a
buyer with a farmer, and the PaymentTransaction that settles it. Order and
product management live in the surrounding platform; this app only keeps
the fields the ledger depends on.

Usage:
    from marketplace.gateways import DjangoTransactionGateway

    gateway = DjangoTransactionGateway()
    event = gateway.lookup_transaction(transaction_id)
"""
