"""Tests for applying deck keywords to field properties."""

import numpy as np
import pytest

from gridprops.abstractions.types import DeckKeyword, KeywordLocation
from gridprops.exceptions import (
    InvalidRangeError, UnsupportedKeywordError, UnsupportedRecordShapeError
)
from gridprops.grid_systems import CartesianGrid
from gridprops.properties import FieldProperties

T = True
F = False


@pytest.fixture
def end_scale_deck(box_keyword, make_keyword, make_record):
    """Horizontal end-point scaling case on a 5x5x1 grid."""
    def edit(name, field, operand_item, value, i1, i2, j1, j2):
        return make_keyword(name, [make_record(**{
            'FIELD': field, operand_item: value,
            'I1': i1, 'I2': i2, 'J1': j1, 'J2': j2, 'K1': 1, 'K2': 1,
        })])

    return [
        make_keyword('GRID'),
        DeckKeyword.data('TOPS', ['25*2000']),
        make_keyword('PROPS'),
        DeckKeyword.data('SOWCR', [
            '1*', '1*', '1*', '1*', '1*',
            '1*', '0.2', '0.3', '0.4', '1*',
            '1*', '0.3', '1*', '0.5', '1*',
            '1*', '0.4', '0.5', '0.6', '1*',
            '1*', '1*', '1*', '1*', '1*',
        ]),
        DeckKeyword.data('SWL', [
            '0.1', '0.1', '0.1', '0.1', '0.1',
            '0.1', '0.2', '0.3', '0.4', '0.1',
            '0.1', '0.3', '0.1', '0.5', '0.1',
            '0.1', '0.4', '0.5', '0.6', '0.1',
            '0.1', '0.1', '0.1', '0.1', '0.1',
        ]),
        box_keyword(1, 5, 2, 2, 1, 1),
        DeckKeyword.data('SWU', ['5*0.23']),
        make_keyword('EQUALS', [
            make_record(FIELD='SWU', VALUE=0.8, I1=2, I2=2, J1=3, J2=4, K1=1, K2=1),
            make_record(FIELD='SWU', VALUE=0.7, I1=4, I2=4, J1=3, J2=3, K1=1, K2=1),
        ]),
        edit('ADD', 'SWU', 'SHIFT', 0.05, 3, 3, 5, 5),
        edit('MINVALUE', 'SWU', 'VALUE', 0.3, 5, 5, 5, 5),
    ]


class TestEndPointScaling:
    """Defaulted tracking through BOX, EQUALS, ADD and MINVALUE."""

    def test_sowcr_defaulted_pattern(self, end_scale_deck):
        props = FieldProperties(CartesianGrid(5, 5, 1), end_scale_deck)

        assert props.has_double_property('SOWCR')
        expected = [
            T, T, T, T, T,
            T, F, F, F, T,
            T, F, T, F, T,
            T, F, F, F, T,
            T, T, T, T, T,
        ]
        assert props.get_double_property('SOWCR').was_defaulted().tolist() == expected

    def test_swl_fully_explicit(self, end_scale_deck):
        props = FieldProperties(CartesianGrid(5, 5, 1), end_scale_deck)
        assert not props.get_double_property('SWL').was_defaulted().any()

    def test_swu_defaulted_pattern(self, end_scale_deck):
        props = FieldProperties(CartesianGrid(5, 5, 1), end_scale_deck)
        swu = props.get_double_property('SWU')

        expected = [
            T, T, T, T, T,
            F, F, F, F, F,
            T, F, T, F, T,
            T, F, T, T, T,
            T, T, T, T, F,
        ]
        assert swu.was_defaulted().tolist() == expected

        data = swu.get_data()
        np.testing.assert_allclose(data[5:10], 0.23)
        assert data[11] == pytest.approx(0.8)
        assert data[16] == pytest.approx(0.8)
        assert data[13] == pytest.approx(0.7)
        assert data[22] == pytest.approx(0.05)
        assert data[24] == pytest.approx(0.3)

    def test_untouched_keywords_not_instantiated(self, end_scale_deck):
        props = FieldProperties(CartesianGrid(5, 5, 1), end_scale_deck)
        assert not props.has_double_property('ISWU')
        assert not props.has_int_property('FLUXNUM')
        with pytest.raises(UnsupportedKeywordError):
            props.has_double_property('NONONO')


class TestKeywordProcessing:
    """Test BOX handling, edits and error reporting."""

    def test_endbox_restores_global_box(self, box_keyword, make_keyword):
        grid = CartesianGrid(2, 2, 1)
        deck = [
            box_keyword(1, 1, 1, 1, 1, 1),
            DeckKeyword.data('PORO', ['0.3']),
            make_keyword('ENDBOX'),
            DeckKeyword.data('NTG', ['4*0.9']),
        ]
        props = FieldProperties(grid, deck)

        poro = props.get_double_property('PORO')
        assert poro.get_data()[0] == pytest.approx(0.3)
        assert np.isnan(poro.get_data()[1:]).all()
        np.testing.assert_allclose(props.get_double_property('NTG').get_data(), 0.9)

    def test_section_closes_box(self, box_keyword, make_keyword):
        grid = CartesianGrid(2, 2, 1)
        deck = [
            box_keyword(1, 1, 1, 1, 1, 1),
            make_keyword('REGIONS'),
            DeckKeyword.data('SATNUM', ['4*2'], value_type=int),
        ]
        props = FieldProperties(grid, deck)
        assert (props.get_int_property('SATNUM').get_data() == 2).all()

    def test_edit_bounds_do_not_outlive_record(self, box_keyword, make_keyword, make_record):
        """A bounded edit record leaves the input box in force for later keywords."""
        grid = CartesianGrid(2, 2, 1)
        deck = [
            box_keyword(1, 2, 1, 1, 1, 1),
            make_keyword('EQUALS', [
                make_record(FIELD='NTG', VALUE=0.5, I1=2, I2=2, J1=2, J2=2, K1=1, K2=1),
                make_record(FIELD='NTG', VALUE=0.7),
            ]),
            DeckKeyword.data('PORO', ['0.1', '0.2']),
        ]
        props = FieldProperties(grid, deck)

        np.testing.assert_allclose(props.get_double_property('NTG').get_data(),
                                   [0.7, 0.7, 1.0, 0.5])
        poro = props.get_double_property('PORO').get_data()
        np.testing.assert_allclose(poro[:2], [0.1, 0.2])
        assert np.isnan(poro[2:]).all()

    def test_box_requires_all_bounds(self, box_keyword):
        grid = CartesianGrid(2, 2, 1)
        with pytest.raises(InvalidRangeError):
            FieldProperties(grid, [box_keyword(1, 1, 1, None, 1, 1)])

    def test_multiply_and_maxvalue(self, make_keyword, make_record):
        grid = CartesianGrid(2, 2, 1)
        deck = [
            DeckKeyword.data('PERMX', ['100', '200', '300', '400']),
            make_keyword('MULTIPLY', [make_record(FIELD='PERMX', FACTOR=2.0)]),
            make_keyword('MAXVALUE', [make_record(FIELD='PERMX', VALUE=500.0)]),
        ]
        props = FieldProperties(grid, deck)
        np.testing.assert_allclose(props.get_double_property('PERMX').get_data(),
                                   [200, 400, 500, 500])

    def test_copy_between_keywords(self, make_keyword, make_record):
        grid = CartesianGrid(2, 2, 1)
        deck = [
            DeckKeyword.data('PERMX', ['4*150']),
            make_keyword('COPY', [make_record(SRC='PERMX', TARGET='PERMY',
                                              I1=1, I2=2, J1=1, J2=1, K1=1, K2=1)]),
        ]
        props = FieldProperties(grid, deck)
        permy = props.get_double_property('PERMY')
        np.testing.assert_allclose(permy.get_data()[:2], 150.0)
        assert np.isnan(permy.get_data()[2:]).all()
        assert permy.was_defaulted().tolist() == [F, F, T, T]

    def test_edit_of_unknown_field(self, make_keyword, make_record):
        grid = CartesianGrid(2, 2, 1)
        keyword = make_keyword('EQUALS', [make_record(FIELD='NONONO', VALUE=1.0)], lineno=42)
        with pytest.raises(UnsupportedKeywordError) as exc_info:
            FieldProperties(grid, [keyword])
        assert 'CASE.DATA line 42' in str(exc_info.value)
        assert exc_info.value.context['location'] == KeywordLocation('CASE.DATA', 42)

    def test_edit_without_operand(self, make_keyword, make_record):
        grid = CartesianGrid(2, 2, 1)
        keyword = make_keyword('ADD', [make_record(FIELD='PORO', SHIFT=None)])
        with pytest.raises(UnsupportedRecordShapeError):
            FieldProperties(grid, [keyword])

    def test_unknown_keywords_ignored(self, make_keyword):
        props = FieldProperties(CartesianGrid(2, 2, 1), [make_keyword('TITLE')])
        assert len(props.int_properties) == 0
        assert len(props.double_properties) == 0

    def test_inactive_cells_flagged_for_region_keywords(self, layered_grid):
        deck = [
            DeckKeyword.data('SATNUM', ['27*1'], value_type=int),
            DeckKeyword.data('TOPS', ['27*1000']),
        ]
        props = FieldProperties(layered_grid, deck)
        assert props.get_int_property('SATNUM').inactive_loaded().sum() == 3
        assert not props.get_double_property('TOPS').inactive_loaded().any()


class TestCustomSchema:
    """Schemas and loading rules come from configuration."""

    def test_config_schema_and_multiplier(self, tmp_path):
        from gridprops.config import Config

        config_file = tmp_path / 'gridprops.yml'
        config_file.write_text(
            "properties:\n"
            "  int_keywords: []\n"
            "  double_keywords:\n"
            "    - {name: MULTPV, default: 2.0}\n"
            "loading:\n"
            "  multiplier_keywords: [MULTPV]\n"
        )
        cfg = Config(config_file)

        props = FieldProperties(CartesianGrid(2, 1, 1), [DeckKeyword.data('MULTPV', ['2*0.5'])],
                                config=cfg)

        np.testing.assert_allclose(props.get_double_property('MULTPV').get_data(), 1.0)
        with pytest.raises(UnsupportedKeywordError):
            props.has_double_property('PORO')


class TestPostProcessors:
    """Keyword post-processors run once per instantiated property."""

    def test_each_property_processed_once_across_loads(self, make_keyword, make_record):
        calls = []

        def halve_poro(data):
            calls.append('PORO')
            data *= 0.5

        def count_satnum(data):
            calls.append('SATNUM')

        props = FieldProperties(
            CartesianGrid(2, 1, 1),
            [DeckKeyword.data('PORO', ['2*0.4'])],
            post_processors={'PORO': halve_poro, 'SATNUM': count_satnum},
        )
        assert calls == ['PORO']
        np.testing.assert_allclose(props.get_double_property('PORO').get_data(), 0.2)

        props.load([
            DeckKeyword.data('SATNUM', ['1', '2'], value_type=int),
            make_keyword('MULTIPLY', [make_record(FIELD='PORO', FACTOR=2.0)]),
        ])

        assert calls == ['PORO', 'SATNUM']
        np.testing.assert_allclose(props.get_double_property('PORO').get_data(), 0.4)

    def test_schema_entry_carries_callable(self):
        def noop(data):
            pass

        props = FieldProperties(CartesianGrid(1, 1, 1), post_processors={'NTG': noop})
        assert props.double_properties.get_keyword_info('NTG').post_processor is noop
        assert props.double_properties.get_keyword_info('PORO').post_processor is None

    def test_unsupported_keyword_rejected(self):
        with pytest.raises(UnsupportedKeywordError, match='FOO'):
            FieldProperties(CartesianGrid(1, 1, 1), post_processors={'FOO': print})
