from collections import namedtuple

from rgssad_cipher import (
    V1_DIRECTORY_KEY,
    decrypt_v1_int,
    decrypt_v1_name,
    decrypt_v3_int,
    decrypt_v3_name,
    v3_directory_key,
)
from rgssad_reader import RgssadFormatError

# 文件名按 UTF-8 解码；无法解码的字节用 surrogateescape 原样保留，
# 写盘时会还原成原始字节。
NAME_ENCODING = 'utf-8'

# 目录中的一条记录。解析完成后不再修改。
FileRecord = namedtuple('FileRecord', ['offset', 'size', 'key', 'name'])


def normalize_name(raw):
    """把解密后的文件名中的反斜杠换成 '/' 并解码为字符串。"""
    return raw.replace(b'\\', b'/').decode(NAME_ENCODING, 'surrogateescape')


def display_name(name):
    """用于打印的文件名，无法解码的字节显示为替换字符。"""
    return name.encode(NAME_ENCODING, 'surrogateescape').decode(NAME_ENCODING, 'replace')


def format_record(record):
    return f'{record.offset} {record.size} {display_name(record.name)}'


def check_bounds(record, archive_size):
    if record.offset + record.size > archive_size:
        raise RgssadFormatError(
            f'记录越界：{display_name(record.name)} 偏移 {record.offset} + 大小 {record.size} '
            f'超出档案长度 {archive_size}')


def iter_records_v1(reader, key=V1_DIRECTORY_KEY):
    """
    解析 v1 目录。

    目录头和文件内容交替排列：
        [加密的文件名长度][加密的文件名][加密的文件大小][文件内容] ...
    目录密钥在整个目录中顺序传递，每条记录的起始密钥都是上一条记录解完后的状态，
    所以只能从头顺序解析。文件内容在这里只跳过，不读取。
    """
    while reader.tell() < reader.size:
        name_length, key = decrypt_v1_int(reader.read_uint32(), key)
        name, key = decrypt_v1_name(reader.read_exact(name_length), key)
        size, key = decrypt_v1_int(reader.read_uint32(), key)

        # 内容密钥就是此刻的目录密钥
        record = FileRecord(reader.tell(), size, key, normalize_name(name))
        check_bounds(record, reader.size)
        reader.seek(record.offset + record.size)
        yield record


def iter_records_v3(reader):
    """
    解析 v3 目录。

    文件头中的整数经 v3_directory_key 得到固定的目录密钥，之后每条记录为
        [偏移][大小][内容密钥][文件名长度][文件名]
    偏移解密后为 0 表示目录结束。
    """
    directory_key = v3_directory_key(reader.read_uint32())

    while True:
        offset = decrypt_v3_int(reader.read_uint32(), directory_key)
        if offset == 0:
            break
        size = decrypt_v3_int(reader.read_uint32(), directory_key)
        file_key = decrypt_v3_int(reader.read_uint32(), directory_key)
        name_length = decrypt_v3_int(reader.read_uint32(), directory_key)
        name = decrypt_v3_name(reader.read_exact(name_length), directory_key)

        record = FileRecord(offset, size, file_key, normalize_name(name))
        check_bounds(record, reader.size)
        yield record
