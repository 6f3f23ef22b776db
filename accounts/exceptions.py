from rest_framework import status
from rest_framework.exceptions import APIException


class Conflict(APIException):
    """
    A state-dependent precondition does not hold, e.g. processing a request
    that was already processed or repaying more than is owed.
    """

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The request conflicts with the current state of the resource."
    default_code = "conflict"
