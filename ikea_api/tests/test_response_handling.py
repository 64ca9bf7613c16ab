# Path: ikea_api/tests/test_response_handling.py
"""Decoder, parser, URL builder, URL rewriter and payload validator."""

import pytest

from ikea_api.engine.errors import DecodeError, StructuralError
from ikea_api.engine.identifier import ProductIdentifier
from ikea_api.engine.response_decoder import ResponseDecoder
from ikea_api.engine.response_parser import (
    parse_availability,
    parse_model_url,
    parse_search_response,
)
from ikea_api.engine.url_builder import CatalogURLBuilder
from ikea_api.engine.url_rewriter import ModelURLRewriter
from ikea_api.engine.validator import Validator
from ikea_api.tests.fakes import (
    EXISTS_URL,
    METADATA_URL,
    MODEL_META_URL,
    SEARCH_URL,
    glb_bytes,
    search_body,
    search_item,
)


class TestResponseDecoder:

    def setup_method(self):
        self.decoder = ResponseDecoder()

    def test_decodes_object(self):
        assert self.decoder.decode(b'{"exists": true}') == {'exists': True}

    def test_decodes_scalars_and_arrays(self):
        assert self.decoder.decode(b'[1, 2]') == [1, 2]
        assert self.decoder.decode(b'false') is False

    @pytest.mark.parametrize('body', [b'', None])
    def test_empty_body(self, body):
        with pytest.raises(DecodeError, match='cannot decode empty body'):
            self.decoder.decode(body)

    def test_invalid_utf8_reports_position(self):
        with pytest.raises(DecodeError) as exc_info:
            self.decoder.decode(b'{"a": "\xff"}')
        assert exc_info.value.position == 7

    def test_invalid_json_reports_position(self):
        with pytest.raises(DecodeError) as exc_info:
            self.decoder.decode(b'{"a": }', identifier='00346735')
        assert exc_info.value.position == 6
        assert exc_info.value.identifier == '00346735'

    def test_null_document(self):
        with pytest.raises(DecodeError):
            self.decoder.decode(b'null')


class TestResponseParser:

    def test_search_items_mapped(self):
        items, dropped = parse_search_response(search_body([search_item()]))
        assert dropped == 0
        assert items[0].identifier == '00346735'
        assert items[0].display_name == 'POÄNG'
        assert items[0].detail_page_url.endswith('poang-00346735/')

    def test_search_accepts_unwrapped_items(self):
        raw = search_item()['product']
        items, _ = parse_search_response(search_body([raw]))
        assert len(items) == 1

    def test_search_drops_incomplete_items(self):
        raw = [
            search_item('00346735'),
            search_item('10346736', mainImageUrl=None),
            search_item('20346737'),
        ]
        items, dropped = parse_search_response(search_body(raw))
        assert [item.identifier for item in items] == ['00346735', '20346737']
        assert dropped == 1

    def test_search_empty_list_is_fine(self):
        assert parse_search_response(search_body([])) == ([], 0)

    @pytest.mark.parametrize('document', [
        {},
        {'searchResultPage': {}},
        {'searchResultPage': {'products': {'main': {}}}},
        {'searchResultPage': {'products': {'main': {'items': 'nope'}}}},
        [],
    ])
    def test_search_missing_path(self, document):
        with pytest.raises(StructuralError, match='invalid response structure'):
            parse_search_response(document)

    def test_availability(self):
        assert parse_availability({'exists': True}) is True
        assert parse_availability({'exists': False}) is False

    @pytest.mark.parametrize('document', [{}, {'exists': 'true'}, {'exists': 1}, ['exists']])
    def test_availability_requires_boolean(self, document):
        with pytest.raises(StructuralError):
            parse_availability(document)

    def test_model_url(self):
        assert parse_model_url({'modelUrl': ' https://cdn/x.glb '}) == 'https://cdn/x.glb'

    @pytest.mark.parametrize('document', [{}, {'modelUrl': ''}, {'modelUrl': None}, {'modelUrl': 5}])
    def test_model_url_required(self, document):
        with pytest.raises(StructuralError):
            parse_model_url(document)


class TestCatalogURLBuilder:

    def test_endpoints(self, config):
        builder = CatalogURLBuilder(config)
        item = ProductIdentifier.parse('003.467.35')

        assert builder.search_url() == SEARCH_URL
        assert builder.metadata_url(item) == METADATA_URL
        assert builder.exists_url(item) == EXISTS_URL
        assert builder.model_url(item) == MODEL_META_URL

    def test_region_and_locale_read_per_call(self, config):
        builder = CatalogURLBuilder(config)
        config.set('region', 'GB')
        config.set('locale', 'en')
        assert builder.search_url() == 'https://sik.search.blue.cdtapps.com/gb/en/search-result-page'

    def test_identifier_query_asks_for_one_hit(self, config):
        params = CatalogURLBuilder(config).search_params('003.467.35')
        assert params['size'] == '1'
        assert params['types'] == 'PRODUCT'
        assert params['q'] == '003.467.35'

    def test_text_query_uses_page_size(self, config):
        assert CatalogURLBuilder(config).search_params('chair')['size'] == '24'
        config.set('search_page_size', 48)
        assert CatalogURLBuilder(config).search_params('chair')['size'] == '48'


class TestModelURLRewriter:

    def test_rewrites_draco_variant(self):
        rewriter = ModelURLRewriter()
        url = 'https://www.ikea.com/global/assets/glb_draco/abc_draco.glb'
        assert rewriter.is_compressed(url)
        assert rewriter.rewrite(url) == 'https://www.ikea.com/global/assets/glb/abc.glb'

    def test_leaves_plain_urls(self):
        url = 'https://www.ikea.com/global/assets/glb/abc.glb'
        assert ModelURLRewriter().rewrite(url) == url

    def test_custom_rules(self):
        rewriter = ModelURLRewriter(rules=[('/v2/', '/v1/')])
        assert rewriter.rewrite('https://cdn/v2/x.glb') == 'https://cdn/v1/x.glb'


class TestValidator:

    def test_url(self, config):
        validator = Validator(config)
        assert validator.validate_url('https://cdn.example.com/x.glb')
        assert not validator.validate_url('')
        assert not validator.validate_url('ftp://cdn.example.com/x.glb')
        assert not validator.validate_url('/relative/x.glb')

    def test_model_accepts_glb(self, config):
        result = Validator(config).validate_model(glb_bytes(2048))
        assert result.valid
        assert result.checks_passed == ['minimum_size', 'magic_number']

    def test_model_rejects_zero_bytes(self, config):
        result = Validator(config).validate_model(b'\x00' * 2000)
        assert not result.valid
        assert result.checks_failed == ['magic_number']

    def test_model_rejects_short_payload(self, config):
        result = Validator(config).validate_model(glb_bytes(1023))
        assert result.checks_failed == ['minimum_size']
        assert '1023 bytes' in result.summary

    def test_thumbnail_size(self, config):
        validator = Validator(config)
        assert validator.validate_thumbnail(b'x' * 100).valid
        assert not validator.validate_thumbnail(b'x' * 99).valid
