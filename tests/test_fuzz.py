"""
Fuzz Testing for private key handling
Tests edge cases and unexpected inputs
"""

import pytest
from hypothesis import given, strategies as st

from utils.network_config import ConfigError, normalize_private_key

HEX_KEY = st.text(alphabet='0123456789abcdefABCDEF', min_size=64, max_size=64)


class TestPrivateKeyFuzzing:
    """Fuzz test key normalization"""

    @given(key=HEX_KEY, prefixed=st.booleans())
    def test_valid_keys_normalize(self, key, prefixed):
        raw = '0x' + key if prefixed else key

        normalized = normalize_private_key(raw, 'KEY')

        assert normalized == '0x' + key.lower()
        # Normalizing twice changes nothing
        assert normalize_private_key(normalized, 'KEY') == normalized

    @given(key=st.text(alphabet='0123456789abcdef', max_size=130).filter(lambda k: len(k) != 64))
    def test_wrong_length_rejected(self, key):
        with pytest.raises(ConfigError):
            normalize_private_key(key, 'KEY')

    @given(
        key=HEX_KEY,
        position=st.integers(min_value=0, max_value=63),
        bad=st.sampled_from('gxzGXZ-_ .')
    )
    def test_non_hex_rejected(self, key, position, bad):
        corrupted = key[:position] + bad + key[position + 1:]

        with pytest.raises(ConfigError):
            normalize_private_key(corrupted, 'KEY')
