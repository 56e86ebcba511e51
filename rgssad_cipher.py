import struct

# ==============================================================================
# 关键设置 (KEY CONFIGURATION)
#
# RGSSAD v1 的目录密钥是写死在引擎里的常量。
# v3 的目录密钥则由文件头里的一个 32 位整数推算出来（见 v3_directory_key）。
#
V1_DIRECTORY_KEY = 0xDEADCAFE
UINT32_MASK = 0xFFFFFFFF
# ==============================================================================


def advance(key: int) -> int:
    """
    密钥推进：key' = key * 7 + 3 (mod 2^32)。

    v1 整数、v1 文件名、文件内容三种解密都用这同一个递推，
    区别只在于调用的频率（每个整数 / 每个字节 / 每 4 个字节）。
    """
    return (key * 7 + 3) & UINT32_MASK


def v3_directory_key(header_value: int) -> int:
    """根据 v3 文件头中的整数计算固定的目录密钥。"""
    return (header_value * 9 + 3) & UINT32_MASK


def decrypt_v1_int(value: int, key: int) -> tuple[int, int]:
    """
    v1 整数解密。返回 (明文, 推进后的密钥)。
    每解一个整数密钥推进一次。
    """
    return (value ^ key) & UINT32_MASK, advance(key)


def decrypt_v1_name(data: bytes, key: int) -> tuple[bytes, int]:
    """
    v1 文件名解密：逐字节与密钥最低字节异或，每个字节推进一次密钥。
    返回 (明文字节, 推进后的密钥)。
    """
    result = bytearray()
    for byte in data:
        result.append(byte ^ (key & 0xFF))
        key = advance(key)
    return bytes(result), key


def decrypt_v3_int(value: int, key: int) -> int:
    # 固定密钥，不推进
    return (value ^ key) & UINT32_MASK


def decrypt_v3_name(data: bytes, key: int) -> bytes:
    """v3 文件名解密：密钥的 4 个字节（小端序）循环使用，从不推进。"""
    key_bytes = struct.pack('<I', key & UINT32_MASK)
    return bytes(byte ^ key_bytes[pos % 4] for pos, byte in enumerate(data))


def decrypt_content(data: bytes, key: int) -> bytes:
    """
    文件内容解密，v1 和 v3 通用。

    参数:
    data (bytes): 加密的文件内容。
    key (int): 该文件的内容密钥（来自目录记录）。

    返回:
    bytes: 解密后的数据。

    第 i 个字节与 (key >> (8 * (i % 4))) & 0xFF 异或，
    每凑满 4 个字节密钥推进一次。完整的 4 字节组按小端整数一次性处理，
    末尾不足 4 字节的部分再逐字节处理。
    """
    key &= UINT32_MASK
    result = bytearray(data)
    whole = len(result) - len(result) % 4

    for pos in range(0, whole, 4):
        word, = struct.unpack_from('<I', result, pos)
        struct.pack_into('<I', result, pos, word ^ key)
        key = advance(key)

    for pos in range(whole, len(result)):
        result[pos] ^= (key >> (8 * (pos % 4))) & 0xFF

    return bytes(result)
