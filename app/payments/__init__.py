"""
Payments app for completed marketplace payments.

This app handles:
- Double-entry posting of completed payments (payments.ledger)
- Background posting tasks for the payment-webhook layer (payments.tasks)

Related apps:
    - marketplace: Orders and payment transactions the ledger posts

Usage:
    from payments.ledger import post_payment_completed

    # Post synchronously
    result = post_payment_completed(transaction_id)

    # Or queue for a worker
    from payments.tasks import post_payment_completed_task
    post_payment_completed_task.delay(str(transaction_id))
"""
