import argparse
import os
import sys

from tqdm import tqdm

from rgssad_directory import format_record, iter_records_v1, iter_records_v3
from rgssad_extract import extract_record
from rgssad_reader import ArchiveReader, RgssadFormatError

# ==============================================================================
# 关键设置
#
# 签名是 7 字节的 "RGSSAD\0"，紧跟 1 字节版本号。
#
SIGNATURE = b'RGSSAD\x00'
SUPPORTED_VERSIONS = (1, 3)
# ==============================================================================


def read_header(reader):
    """校验签名并返回版本号。"""
    signature = reader.read_exact(len(SIGNATURE))
    if signature != SIGNATURE:
        raise RgssadFormatError('错误：不是有效的 RGSSAD 档案')

    version = reader.read_uint8()
    if version not in SUPPORTED_VERSIONS:
        raise RgssadFormatError(f'错误：不支持的档案版本 {version}')
    return version


def read_directory(reader, version, echo=True):
    """
    完整解析目录，返回记录列表。
    每解出一条记录就立即打印一行 "<偏移> <大小> <文件名>"。
    """
    records = []
    iter_records = iter_records_v1 if version == 1 else iter_records_v3
    for record in iter_records(reader):
        if echo:
            print(format_record(record))
        records.append(record)
    return records


def unpack(path, output_dir='.', list_only=False):
    """
    解包一个 RGSSAD 档案。目录全部解析成功之后才开始写文件。
    返回解析出的记录列表。
    """
    with ArchiveReader.open(path) as reader:
        version = read_header(reader)
        records = read_directory(reader, version)

        if list_only:
            return records

        for record in tqdm(records, desc='解包进度', unit='个文件', file=sys.stderr):
            extract_record(reader, record, output_dir)

    return records


def main(argv=None):
    parser = argparse.ArgumentParser(description='RGSSAD (v1/v3) 档案解包工具')
    parser.add_argument('archive', type=str, help='要解包的档案路径 (例如 Game.rgssad / Game.rgss3a)')
    parser.add_argument('-o', '--output-dir', default='.', help='输出目录（默认为当前目录）')
    parser.add_argument('-l', '--list', dest='list_only', action='store_true',
                        help='只列出档案中的文件，不解包')
    opt = parser.parse_args(argv)

    if not os.path.isfile(opt.archive):
        print(f"错误：文件 '{opt.archive}' 不存在。", file=sys.stderr)
        return 1

    try:
        unpack(opt.archive, opt.output_dir, opt.list_only)
    except (RgssadFormatError, OSError) as e:
        print(f'处理过程中发生严重错误: {e}', file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
