"""
Resolution of resource identifiers to local names.
"""


def resolve(uri: str) -> str:
    """Return the local name of a resource identifier.

    The local name is the text after the last '#', or after the last '/'
    when there is no fragment. Identifiers without either separator are
    returned unchanged.

    Examples:
        resolve("http://example.org/vehicles#Car")  -> "Car"
        resolve("http://example.org/vehicles/Car")  -> "Car"
        resolve("Car")                              -> "Car"
    """
    for separator in ("#", "/"):
        _, found, local_name = uri.rpartition(separator)
        if found and local_name:
            return local_name
    return uri
