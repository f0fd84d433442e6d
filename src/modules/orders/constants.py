"""Order domain constants.

An order is either waiting to be packed (``pending``) or has left the shop
(``dispatched``).  Any status may be set from any other; there is no
terminal state.
"""

from django.db import models


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    DISPATCHED = "dispatched", "Dispatched"


ORDER_NUMBER_MAX_LENGTH = 50
