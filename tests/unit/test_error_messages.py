from docingest.api.error_messages import GENERIC_ERROR, normalize_error_message


class TestNormalizeErrorMessage:
    def test_string_passes_through(self) -> None:
        assert normalize_error_message("Disk full") == "Disk full"

    def test_none_is_generic(self) -> None:
        assert normalize_error_message(None) == GENERIC_ERROR

    def test_detail_string(self) -> None:
        assert normalize_error_message({"detail": "Bad folder"}) == "Bad folder"

    def test_nested_error_message(self) -> None:
        body = {"error": {"message": "Quota exceeded", "code": 42}}
        assert normalize_error_message(body) == "Quota exceeded"

    def test_fastapi_validation_list_is_joined(self) -> None:
        body = {"detail": [{"msg": "x", "message": "field required"}, {"detail": "too long"}]}
        assert normalize_error_message(body) == "field required, too long"

    def test_unknown_object_is_json(self) -> None:
        assert normalize_error_message({"code": 7}) == '{"code": 7}'

    def test_empty_object_is_generic(self) -> None:
        assert normalize_error_message({}) == GENERIC_ERROR

    def test_numbers_are_stringified(self) -> None:
        assert normalize_error_message(500) == "500"
