from PartBin.exceptions import (
    ComponentNotFoundError,
    FormatError,
    PartBinException,
    ValidationError,
    get_http_status_code,
    map_exception_to_base_service,
)


class TestFormatError:
    def test_reason_and_details(self):
        error = FormatError("required fields missing", details={"missing_fields": ["quantity"]})

        assert str(error) == "required fields missing"
        assert error.reason == "required fields missing"
        assert error.to_dict() == {
            "error_code": "FORMAT_ERROR",
            "message": "required fields missing",
            "details": {"missing_fields": ["quantity"]},
        }


class TestStatusCodes:
    def test_mapping(self):
        assert get_http_status_code(FormatError("no rows found")) == 422
        assert get_http_status_code(ValidationError("bad")) == 422
        assert get_http_status_code(ComponentNotFoundError("missing", component_id="x")) == 404
        assert get_http_status_code(PartBinException("generic")) == 400
        assert get_http_status_code(RuntimeError("boom")) == 500


class TestMapException:
    def test_standard_exceptions(self):
        assert isinstance(map_exception_to_base_service(ValueError("x")), ValidationError)
        assert map_exception_to_base_service(RuntimeError("x")).error_code == "UNKNOWN_ERROR"

    def test_partbin_exception_unchanged(self):
        error = ComponentNotFoundError("missing", component_id="abc")
        assert map_exception_to_base_service(error) is error
        assert error.details == {"resource_type": "component", "resource_id": "abc"}
