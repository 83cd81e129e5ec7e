from admin_cascade.detection.header_inference import HeaderPatternInferencer
from admin_cascade.models import ColumnPattern

from conftest import HDX_HEADERS, SCENARIO_HEADERS


class TestHeaderPatternInferencer:
    def test_admin_name_convention(self):
        inference = HeaderPatternInferencer().infer_from_headers(SCENARIO_HEADERS, 1)
        assert inference.pattern == ColumnPattern(
            code_prefix='Admin', code_suffix='Pcode',
            name_prefix='Admin', name_suffix='Name'
        )
        assert inference.locale == 'en'

    def test_hdx_convention_ignores_alternate_and_reference_columns(self):
        inference = HeaderPatternInferencer().infer_from_headers(HDX_HEADERS, 2)
        assert inference.pattern == ColumnPattern(
            code_prefix='ADM', code_suffix='_PCODE',
            name_prefix='ADM', name_suffix=''
        )

    def test_locale_tie_prefers_first_seen(self):
        inference = HeaderPatternInferencer().infer_from_headers(HDX_HEADERS, 2)
        assert inference.locale == 'EN'

    def test_locale_is_most_frequent_across_levels(self):
        headers = [
            'ADM0_FR', 'ADM0_PCODE',
            'ADM1_FR', 'ADM1_EN', 'ADM1_PCODE',
            'ADM2_EN', 'ADM2_FR', 'ADM2_AR', 'ADM2_PCODE',
        ]
        inference = HeaderPatternInferencer().infer_from_headers(headers, 2)
        assert inference.locale == 'FR'

    def test_pattern_reconstructs_headers_for_every_level(self):
        inference = HeaderPatternInferencer().infer_from_headers(SCENARIO_HEADERS, 1)
        for level in (0, 1):
            assert inference.pattern.code_header(level) in SCENARIO_HEADERS
            assert inference.pattern.name_header(level, inference.locale) in SCENARIO_HEADERS

    def test_non_localized_name_columns(self):
        headers = ['admin0Name', 'admin0Pcode', 'admin1Name', 'admin1Pcode']
        inference = HeaderPatternInferencer().infer_from_headers(headers, 1)
        assert inference.pattern.name_prefix == 'admin'
        assert inference.pattern.name_suffix == 'Name'
        assert inference.locale == ''
        assert inference.pattern.name_header(1, inference.locale) == 'admin1Name'

    def test_missing_name_headers_leave_name_pattern_empty(self):
        headers = ['ADM0_PCODE', 'ADM1_PCODE', 'ADM1_REF']
        inference = HeaderPatternInferencer().infer_from_headers(headers, 1)
        assert not inference.pattern.has_name_pattern
        assert inference.pattern.has_code_pattern
        assert inference.locale == ''

    def test_reads_header_row_from_document(self, hdx_document):
        inference = HeaderPatternInferencer().infer(hdx_document, 'xx_adm2', 2)
        assert inference.pattern.code_header(1) == 'ADM1_PCODE'
        assert inference.pattern.name_header(1, inference.locale) == 'ADM1_EN'
