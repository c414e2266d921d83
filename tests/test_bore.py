import re
from datetime import datetime

import pytest

import boresizer.bore as bore
from boresizer.bore import (
    NO_FEASIBLE_BORE_MESSAGE,
    RESULT_ID_ALPHABET,
    generate_bore,
    generate_bore_response,
    generate_result_id,
)
from boresizer.config import PackingConfig
from boresizer.model import Cable, DiameterExceededError, NoCablesError, TableRow, TooManyCablesError


def _config(**overrides):
    base = dict(max_iterations=8, radius_step_size=0.5, angle_step_size=30.0, max_circles=10, max_diameter=10.0)
    base.update(overrides)
    return PackingConfig(**base)


def _rows():
    return [
        TableRow('custom', quantity=2, custom_name='Power', custom_diameter=1.2),
        TableRow(Cable(name='HDMI', diameter=1.5), quantity=1),
        TableRow(Cable(name='USB', diameter=0.5), quantity=3),
    ]


def test_generate_result_id_format():
    ids = {generate_result_id() for _ in range(50)}

    for result_id in ids:
        assert len(result_id) == 8
        assert set(result_id) <= set(RESULT_ID_ALPHABET)
    assert len(ids) > 1


def test_generate_bore_packs_and_colors():
    result = generate_bore(_rows(), _config())

    assert re.fullmatch(f'[{RESULT_ID_ALPHABET}]{{8}}', result.id)
    assert datetime.fromisoformat(result.created_at).tzinfo is not None
    assert result.bore.name == 'enclose'
    assert result.bore.diameter >= 1.5 + 1.2 - 1e-9
    assert len(result.cables) == 6
    assert result.cables[0].name == 'HDMI'
    assert result.metadata['success']

    colors = {}
    for cable in result.cables:
        assert re.fullmatch(r'#[0-9a-f]{6}', cable.color)
        colors.setdefault(cable.name, set()).add(cable.color)
    assert all(len(values) == 1 for values in colors.values())


def test_generate_bore_requires_rows():
    with pytest.raises(NoCablesError) as exc:
        generate_bore([], _config())

    assert str(exc.value) == 'No cables entered.'


def test_generate_bore_rejects_rows_without_valid_cables():
    with pytest.raises(NoCablesError):
        generate_bore([TableRow('custom', quantity=4, custom_diameter=0)], _config())


def test_generate_bore_enforces_max_circles():
    rows = [TableRow('custom', quantity=3, custom_diameter=1.0)]

    with pytest.raises(TooManyCablesError) as exc:
        generate_bore(rows, _config(max_circles=2))

    assert str(exc.value) == 'Exceeded maximum number of cables (2).'


def test_generate_bore_enforces_max_diameter():
    with pytest.raises(DiameterExceededError):
        generate_bore([TableRow('custom', quantity=1, custom_diameter=15)], _config())


def test_response_for_valid_rows():
    response = generate_bore_response(_rows(), _config())

    assert response['success'] is True
    data = response['data']
    assert set(data) == {'id', 'bore', 'cables', 'createdAt', 'metadata'}
    assert data['metadata']['success'] is True
    assert data['metadata']['warnings'] == []
    assert len(data['cables']) == 6


def test_response_flags_packing_without_feasible_enclosure():
    rows = [TableRow('custom', quantity=3, custom_diameter=2)]
    config = _config(max_iterations=1, radius_step_size=1.0, angle_step_size=90.0)

    response = generate_bore_response(rows, config)

    assert response['success'] is False
    assert response['error'] == {'code': 422, 'message': NO_FEASIBLE_BORE_MESSAGE}
    metadata = response['data']['metadata']
    assert metadata['success'] is False
    assert metadata['iterations'] == 1
    assert metadata['warnings']
    assert len(response['data']['cables']) == 3


def test_response_maps_input_errors_to_422():
    response = generate_bore_response([TableRow('custom', quantity=1, custom_diameter=15)], _config())

    assert response == {
        'success': False,
        'error': {'code': 422, 'message': 'Diameter exceeds maximum limit'},
    }


def test_response_maps_unexpected_errors_to_500(monkeypatch):
    def _boom(circles, config):
        raise RuntimeError('boom')

    monkeypatch.setattr(bore, 'calculate_minimum_enclose_for_circles', _boom)

    response = generate_bore_response(_rows(), _config())

    assert response == {'success': False, 'error': {'code': 500, 'message': 'Internal server error.'}}
