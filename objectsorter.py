from typing import Any, Callable, Dict, Hashable, List, Mapping, MutableMapping, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


def _property_key(property_name: str) -> Callable[[Mapping[str, Any]], Tuple[bool, Any]]:
    def key(item: Mapping[str, Any]) -> Tuple[bool, Any]:
        # records without the property go last and are never compared by value
        if property_name in item:
            return (False, item[property_name])
        return (True, None)

    return key


def sort_array_by_property(items: List[MutableMapping[str, Any]], property_name: str) -> None:
    """Sorts `items` in place by the value of `property_name` in ascending order.
    The values are compared with the normal `<` operator, so mixing incomparable types raises `TypeError`.
    """

    items.sort(key=_property_key(property_name))


def sort_object_keys(record: Mapping[K, V]) -> Dict[K, V]:
    """Returns a shallow copy of `record` with keys inserted in sorted order."""

    return {key: record[key] for key in sorted(record.keys())}


def sort_object_keys_recursive(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        return {key: sort_object_keys_recursive(value) for key, value in sort_object_keys(obj).items()}
    elif isinstance(obj, list):
        return [sort_object_keys_recursive(value) for value in obj]
    else:
        return obj
