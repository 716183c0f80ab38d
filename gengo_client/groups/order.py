"""Order method group: status, cancellation, and comments of an order."""

from __future__ import annotations

import json

from gengo_client.api.models import Comment, Order
from gengo_client.groups.base import MethodGroup, pluck, pluck_list, require_id, require_text

_ORDER = "translate/order/{order_id}"
_COMMENT = "translate/order/{order_id}/comment"
_COMMENTS = "translate/order/{order_id}/comments"


class OrderMethodGroup(MethodGroup):
    """Methods of the Gengo ``translate/order`` area."""

    async def get(self, order_id: int) -> Order:
        """Order totals and the ids of its jobs, bucketed by state."""
        order_id = require_id(order_id, "order_id")
        return await self._client.get_json(
            _ORDER.format(order_id=order_id),
            parse=pluck("order", Order.from_dict),
        )

    async def delete(self, order_id: int) -> None:
        """Cancel every job of the order that is still available."""
        order_id = require_id(order_id, "order_id")
        await self._client.delete_json(_ORDER.format(order_id=order_id))

    async def get_comments(self, order_id: int) -> list[Comment]:
        order_id = require_id(order_id, "order_id")
        return await self._client.get_json(
            _COMMENTS.format(order_id=order_id),
            parse=pluck_list("thread", Comment.from_dict),
        )

    async def post_comment(self, order_id: int, body: str) -> None:
        """Add a comment to the order thread.

        Sent as a plain form post: the JSON travels in the ``data`` field
        next to the auth fields.
        """
        order_id = require_id(order_id, "order_id")
        require_text(body, "body", "Comment body not provided")
        await self._client.post_form(
            _COMMENT.format(order_id=order_id),
            {"data": json.dumps({"body": body})},
        )
