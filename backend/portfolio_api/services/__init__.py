# Services package init
"""
Portfolio Backend: Services Layer
==================================

What:  Business logic between the HTTP routes and the outside world.

Service Inventory:
    - SubmissionStore (abstract) / SqlAlchemySubmissionStore: durable records
    - NotificationDispatcher (abstract) / SendGridDispatcher: owner email
    - SubmissionWorkflow: validate → persist → notify → respond

Routes never touch the store or the dispatcher directly; they hand the raw
form fields to the workflow and render whatever result it returns.
"""
