"""
Portfolio Backend: Abstract Notification Dispatcher Interface
==============================================================

What:  Contract for telling the site owner that a contact message arrived.
Why:   The workflow must not care which provider delivers the email, and its
       tests need a dispatcher that never touches the network.
How:   Concrete implementations inherit from NotificationDispatcher and
       implement notify().

Implementations:
    - SendGridDispatcher: SendGrid v3 Mail Send API over httpx
"""

from abc import ABC, abstractmethod


class NotificationDispatcher(ABC):
    """
    Abstract sender of contact notifications.

    Contract:
        - notify() makes exactly one delivery attempt; no retries, no backoff
        - The recipient comes from configuration, never from the submission
        - The submitter's address is used as reply-to
        - Every provider-specific failure is raised as DispatchError
    """

    @abstractmethod
    async def notify(self, name: str, email: str, message: str) -> None:
        """
        Send the contact message to the site owner.

        Args:
            name:    Submitter's name (used in the subject line).
            email:   Submitter's address (set as reply-to).
            message: Message body.

        Raises:
            DispatchError: Credentials missing, network failure, or the
                provider rejected the message.
        """
        ...
