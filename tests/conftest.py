import struct

import pytest

V1_SEED = 0xDEADCAFE
MASK = 0xFFFFFFFF


def lcg(key):
    return (key * 7 + 3) & MASK


def encrypt_content(data, key):
    """逐字节实现的内容加密，与解密对称，用来构造测试档案。"""
    out = bytearray()
    j = 0
    for i, b in enumerate(data):
        if j == 4:
            j = 0
            key = lcg(key)
        out.append(b ^ ((key >> (8 * (i % 4))) & 0xFF))
        j += 1
    return bytes(out)


def build_v1(entries, seed=V1_SEED):
    """entries: [(name_bytes, content_bytes), ...]"""
    key = seed
    buf = bytearray(b'RGSSAD\x00\x01')
    for name, content in entries:
        buf += struct.pack('<I', len(name) ^ key)
        key = lcg(key)
        for b in name:
            buf.append(b ^ (key & 0xFF))
            key = lcg(key)
        buf += struct.pack('<I', len(content) ^ key)
        key = lcg(key)
        buf += encrypt_content(content, key)
    return bytes(buf)


def build_v3(header_value, entries):
    """entries: [(name_bytes, content_bytes, content_key), ...]"""
    key = (header_value * 9 + 3) & MASK
    key_bytes = struct.pack('<I', key)

    offset = 8 + 4 + sum(16 + len(name) for name, _, _ in entries) + 4
    buf = bytearray(b'RGSSAD\x00\x03')
    buf += struct.pack('<I', header_value)
    for name, content, file_key in entries:
        buf += struct.pack('<IIII', offset ^ key, len(content) ^ key, file_key ^ key, len(name) ^ key)
        buf += bytes(b ^ key_bytes[i % 4] for i, b in enumerate(name))
        offset += len(content)
    buf += struct.pack('<I', 0 ^ key)
    for name, content, file_key in entries:
        buf += encrypt_content(content, file_key)
    return bytes(buf)


@pytest.fixture
def write_archive(tmp_path):
    def _write(data, name='Game.rgssad'):
        path = tmp_path / name
        path.write_bytes(data)
        return path
    return _write
