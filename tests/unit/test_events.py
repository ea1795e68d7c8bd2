"""Unit tests for the event binder."""

import pytest
from eth_utils import keccak

from abicodec import ERC20, events
from abicodec.events import EventMethod
from abicodec.exc import EncodingError, StructuralError

VITALIK = '0xd8da6bf26964af9d7eed9e03e53415d37aa96045'
WETH = '0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2'
TRANSFER_TOPIC = '0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef'


def _topic(address: str) -> str:
    return '0x' + address[2:].rjust(64, '0')


def _word(n: int) -> str:
    return n.to_bytes(32, 'big').hex()


def _event(inputs, name='Ev', anonymous=False):
    return EventMethod({'type': 'event', 'name': name, 'anonymous': anonymous, 'inputs': inputs})


class TestBinding:
    def test_named_events_only(self):
        abi = ERC20 + [{'type': 'event', 'inputs': []}]
        assert sorted(events(abi)) == ['Approval', 'Transfer']

    def test_signature_and_topic(self):
        ev = events(ERC20)['Transfer']
        assert ev.signature == 'Transfer(address,address,uint256)'
        assert '0x' + ev.topic == TRANSFER_TOPIC

    def test_overloads_keyed_by_signature(self):
        abi = [
            {'type': 'event', 'name': 'Log', 'inputs': [{'name': 'a', 'type': 'uint256'}]},
            {'type': 'event', 'name': 'Log', 'inputs': [{'name': 'a', 'type': 'string'}]},
        ]
        assert sorted(events(abi)) == ['Log(string)', 'Log(uint256)']

    def test_repr(self):
        assert repr(events(ERC20)['Approval']) == "EventMethod('Approval(address,address,uint256)')"


class TestDecode:
    def test_transfer(self):
        ev = events(ERC20)['Transfer']
        value = ev.decode([TRANSFER_TOPIC, _topic(VITALIK), _topic(WETH)], '0x' + _word(10 ** 18))
        assert value == {'from': VITALIK, 'to': WETH, 'value': 10 ** 18}
        assert list(value) == ['from', 'to', 'value']

    def test_topic_case_insensitive(self):
        ev = events(ERC20)['Transfer']
        topics = [TRANSFER_TOPIC.upper().replace('0X', '0x'), _topic(VITALIK), _topic(WETH)]
        assert ev.decode(topics, bytes.fromhex(_word(1)))['value'] == 1

    def test_missing_indexed_topic(self):
        ev = events(ERC20)['Transfer']
        with pytest.raises(StructuralError, match='expects 2 indexed topics, got 1'):
            ev.decode([TRANSFER_TOPIC, _topic(VITALIK)], '0x' + _word(1))

    def test_extra_topic(self):
        ev = events(ERC20)['Transfer']
        with pytest.raises(StructuralError, match='got 3'):
            ev.decode([TRANSFER_TOPIC] + [_topic(VITALIK)] * 3, '0x' + _word(1))

    def test_missing_signature_topic(self):
        with pytest.raises(StructuralError, match='No signature topic'):
            events(ERC20)['Transfer'].decode([], '0x')

    def test_wrong_signature_topic(self):
        ev = events(ERC20)['Approval']
        with pytest.raises(StructuralError, match='Wrong signature topic'):
            ev.decode([TRANSFER_TOPIC, _topic(VITALIK), _topic(WETH)], '0x' + _word(1))

    def test_anonymous(self):
        ev = _event([
            {'name': 'who', 'type': 'address', 'indexed': True},
            {'name': 'amount', 'type': 'uint64'},
        ], anonymous=True)
        assert ev.decode([_topic(VITALIK)], '0x' + _word(5)) == {'who': VITALIK, 'amount': 5}

    def test_positional_interleaving(self):
        ev = _event([
            {'type': 'uint8'},
            {'type': 'address', 'indexed': True},
            {'type': 'bool'},
            {'type': 'int16', 'indexed': True},
        ])
        topics = ['0x' + ev.topic, _topic(WETH), '0x' + 'ff' * 32]
        data = '0x' + _word(7) + _word(1)
        assert ev.decode(topics, data) == (7, WETH, True, -1)

    def test_hashed_field_returns_raw_topic(self):
        ev = _event([
            {'name': 'key', 'type': 'string', 'indexed': True},
            {'name': 'value', 'type': 'uint256'},
        ])
        hashed = '0x' + keccak(text='hello').hex()
        assert ev.decode(['0x' + ev.topic, hashed], '0x' + _word(3)) == {
            'key': hashed, 'value': 3,
        }

    def test_dynamic_data(self):
        ev = _event([
            {'name': 'id', 'type': 'uint256', 'indexed': True},
            {'name': 'uri', 'type': 'string'},
        ])
        data = '0x' + _word(0x20) + _word(2) + '6869'.ljust(64, '0')
        assert ev.decode(['0x' + ev.topic, '0x' + _word(9)], data) == {'id': 9, 'uri': 'hi'}


class TestTopics:
    def test_match_any(self):
        ev = events(ERC20)['Transfer']
        assert ev.topics({'from': None, 'to': None, 'value': None}) == [TRANSFER_TOPIC, None, None]

    def test_encodes_word_values(self):
        ev = events(ERC20)['Transfer']
        assert ev.topics([None, VITALIK, 123]) == [TRANSFER_TOPIC, None, _topic(VITALIK)]

    def test_roundtrip_word_fields(self):
        ev = _event([
            {'name': 'a', 'type': 'int8', 'indexed': True},
            {'name': 'b', 'type': 'bool', 'indexed': True},
            {'name': 'c', 'type': 'bytes4', 'indexed': True},
        ])
        values = {'a': -5, 'b': True, 'c': b'\xde\xad\xbe\xef'}
        assert ev.decode(ev.topics(values), '0x') == values

    def test_requires_every_field(self):
        ev = events(ERC20)['Transfer']
        with pytest.raises(StructuralError, match='all 3 inputs'):
            ev.topics([None, VITALIK])

    def test_mapping_keys_must_match_inputs(self):
        ev = events(ERC20)['Transfer']
        with pytest.raises(StructuralError, match=r"missing \['to'\], unknown \['too'\]"):
            ev.topics({'from': None, 'too': None, 'value': None})
        with pytest.raises(StructuralError, match=r"missing \['value'\]"):
            ev.topics({'from': None, 'to': VITALIK})

    def test_mapping_rejected_for_unnamed_inputs(self):
        ev = _event([{'name': '', 'type': 'address', 'indexed': True}])
        with pytest.raises(StructuralError, match='pass values positionally'):
            ev.topics({'': VITALIK})

    def test_anonymous_has_no_signature_topic(self):
        ev = _event([{'name': 'who', 'type': 'address', 'indexed': True}], anonymous=True)
        assert ev.topics([VITALIK]) == [_topic(VITALIK)]

    def test_string_hashed(self):
        ev = _event([{'name': 'key', 'type': 'string', 'indexed': True}])
        assert ev.topics(['hello'])[1] == '0x' + keccak(text='hello').hex()

    def test_bytes_hashed(self):
        ev = _event([{'name': 'blob', 'type': 'bytes', 'indexed': True}])
        assert ev.topics([b'\x01\x02'])[1] == '0x' + keccak(b'\x01\x02').hex()

    def test_array_hashes_concatenated_elements(self):
        ev = _event([{'name': 'ids', 'type': 'uint256[]', 'indexed': True}])
        preimage = (1).to_bytes(32, 'big') + (2).to_bytes(32, 'big')
        assert ev.topics([[1, 2]])[1] == '0x' + keccak(preimage).hex()

    def test_tuple_hashes_components(self):
        ev = _event([{
            'name': 'pair', 'type': 'tuple', 'indexed': True,
            'components': [{'name': 'x', 'type': 'uint8'}, {'name': 'owner', 'type': 'address'}],
        }])
        preimage = (7).to_bytes(32, 'big') + bytes(12) + bytes.fromhex(VITALIK[2:])
        expected = '0x' + keccak(preimage).hex()
        assert ev.topics([{'x': 7, 'owner': VITALIK}])[1] == expected
        assert ev.topics([(7, VITALIK)])[1] == expected

    def test_string_type_checked(self):
        ev = _event([{'name': 'key', 'type': 'string', 'indexed': True}])
        with pytest.raises(EncodingError, match='Expected str'):
            ev.topics([42])
