import pytest

from photogallery.exceptions import ValidationError
from photogallery.services.batch_validator import BatchValidator


@pytest.fixture
def validator():
    return BatchValidator()


def _fields(item_error):
    return {error.field for error in item_error.errors}


class TestValidate:
    def test_partitions_and_keeps_indices(self, validator):
        result = validator.validate([
            {"url": "not a url"},
            {"url": "https://example.com/a.jpg"},
            {"title": "missing url"},
            {"url": "https://example.com/b.jpg", "order": 4},
        ])

        assert [index for index, _ in result.valid] == [1, 3]
        assert [item.index for item in result.invalid] == [0, 2]
        assert result.valid[1][1].order == 4

    def test_items_are_independent(self, validator):
        result = validator.validate([{"url": "https://example.com/a.jpg"}] * 3 + [42])

        assert len(result.valid) == 3
        assert [item.index for item in result.invalid] == [3]

    def test_missing_url(self, validator):
        result = validator.validate([{}])

        error = result.invalid[0].errors[0]
        assert error.field == "url"
        assert error.type == "missing"

    def test_malformed_url(self, validator):
        result = validator.validate([{"url": "example"}])
        assert _fields(result.invalid[0]) == {"url"}

    def test_url_kept_verbatim(self, validator):
        result = validator.validate([{"url": "https://example.com"}])
        assert result.valid[0][1].url == "https://example.com"

    def test_non_http_scheme_accepted(self, validator):
        result = validator.validate([{"url": "ftp://files.example.com/a.jpg"}])
        assert len(result.valid) == 1

    @pytest.mark.parametrize("order", [-1, 1.5, "3", True, 2**31])
    def test_rejects_bad_order(self, validator, order):
        result = validator.validate([{"url": "https://example.com/a.jpg", "order": order}])

        assert result.valid == []
        assert _fields(result.invalid[0]) == {"order"}

    def test_zero_order_accepted(self, validator):
        result = validator.validate([{"url": "https://example.com/a.jpg", "order": 0}])
        assert result.valid[0][1].order == 0

    def test_non_string_title(self, validator):
        result = validator.validate([{"url": "https://example.com/a.jpg", "title": 123}])
        assert _fields(result.invalid[0]) == {"title"}

    def test_non_object_item(self, validator):
        result = validator.validate(["https://example.com/a.jpg"])
        assert result.invalid[0].index == 0

    def test_unknown_keys_ignored(self, validator):
        result = validator.validate([{"url": "https://example.com/a.jpg", "width": 100}])
        assert len(result.valid) == 1

    def test_empty_input(self, validator):
        result = validator.validate([])
        assert result.valid == [] and result.invalid == []


class TestValidateOne:
    def test_returns_photo(self, validator):
        photo = validator.validate_one({"url": "https://example.com/a.jpg", "title": "A"})
        assert photo.title == "A"
        assert photo.order is None

    def test_raises_with_field_detail(self, validator):
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_one({"url": "nope", "order": -3})

        fields = {error["field"] for error in exc_info.value.detail}
        assert fields == {"url", "order"}
