#!/usr/bin/env python3
"""
又拍云客户端示例
演示上传、下载、文件信息、列目录、删除、空间用量和缓存刷新

配置通过环境变量或 .env 文件提供: UPYUN_USER、UPYUN_PASSWORD、UPYUN_BUCKET
"""

import sys
import argparse
from datetime import datetime

from upyun_client import UpYun, DirIterator, ERROR_LIST_END, FileInfo
from upyun_client.utils import format_file_size


def print_result(action: str, result) -> bool:
    """打印操作结果，返回是否成功"""
    if result.ok:
        print(f"✅ {action}成功")
    else:
        print(f"❌ {action}失败 - 状态码: {result.status_code}, 错误码: {result.error_code}, 信息: {result.error_msg}")
    return result.ok


def print_file(file_info: FileInfo):
    kind = "目录" if file_info.is_folder else "文件"
    modified = datetime.fromtimestamp(file_info.timestamp).strftime('%Y-%m-%d %H:%M:%S')
    print(f"  [{kind}] {file_info.filename}  {format_file_size(file_info.size)}  {modified}")


def cmd_upload(client: UpYun, args) -> bool:
    result = client.upload_file(args.remote, args.local, md5_verify=args.md5)
    ok = print_result("上传", result)
    if ok and result.file_type:
        print(f"  图片信息: {result.width}x{result.height}, 帧数: {result.frames}, 类型: {result.file_type}")
    return ok


def cmd_download(client: UpYun, args) -> bool:
    return print_result("下载", client.download_file(args.remote, args.local))


def cmd_info(client: UpYun, args) -> bool:
    result = client.file_info(args.remote)
    ok = print_result("获取文件信息", result)
    if ok:
        print(f"  类型: {result.file_type}, 大小: {format_file_size(result.size)}, 修改时间: {result.timestamp}")
    return ok


def cmd_list(client: UpYun, args) -> bool:
    iterator = DirIterator(limit=args.limit, order=args.desc)
    page = 0
    while True:
        page += 1
        print(f"第{page}页:")
        result = client.list_dir_iter(args.remote, iterator, print_file)
        if not result.ok:
            return print_result("列目录", result)
        if result.error_code != 0:
            if result.error_code != ERROR_LIST_END:
                print(f"⚠️ 列目录提前结束: {result.error_msg}")
            return True


def cmd_mkdir(client: UpYun, args) -> bool:
    return print_result("创建目录", client.make_dir(args.remote, auto_make=args.parents))


def cmd_delete(client: UpYun, args) -> bool:
    return print_result("删除", client.delete_file(args.remote))


def cmd_usage(client: UpYun, args) -> bool:
    result = client.get_usage(args.remote)
    ok = print_result("获取空间用量", result)
    if ok:
        print(f"  已使用: {format_file_size(result.bytes_used)}")
    return ok


def cmd_purge(client: UpYun, args) -> bool:
    status = client.purge(args.urls)
    print(f"缓存刷新返回状态码: {status}")
    return status == 200


def parse_arguments():
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        description='又拍云客户端示例',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  python client_example.py upload /remote/a.jpg ./a.jpg --md5
  python client_example.py download /remote/a.jpg ./a_copy.jpg
  python client_example.py list / --limit 50
  python client_example.py purge http://demo.b0.upaiyun.com/a.jpg
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    upload = subparsers.add_parser('upload', help='上传本地文件')
    upload.add_argument('remote', help='远程路径')
    upload.add_argument('local', help='本地文件路径')
    upload.add_argument('--md5', action='store_true', help='上传后校验MD5')
    upload.set_defaults(handler=cmd_upload)

    download = subparsers.add_parser('download', help='下载文件到本地')
    download.add_argument('remote', help='远程路径')
    download.add_argument('local', help='本地保存路径')
    download.set_defaults(handler=cmd_download)

    info = subparsers.add_parser('info', help='获取文件信息')
    info.add_argument('remote', help='远程路径')
    info.set_defaults(handler=cmd_info)

    listing = subparsers.add_parser('list', help='分页列目录')
    listing.add_argument('remote', nargs='?', default='/', help='远程目录路径')
    listing.add_argument('--limit', type=int, default=100, help='每页条目数')
    listing.add_argument('--desc', action='store_true', help='按时间降序')
    listing.set_defaults(handler=cmd_list)

    mkdir = subparsers.add_parser('mkdir', help='创建目录')
    mkdir.add_argument('remote', help='远程目录路径')
    mkdir.add_argument('-p', '--parents', action='store_true', help='自动创建父目录')
    mkdir.set_defaults(handler=cmd_mkdir)

    delete = subparsers.add_parser('delete', help='删除文件或空目录')
    delete.add_argument('remote', help='远程路径')
    delete.set_defaults(handler=cmd_delete)

    usage = subparsers.add_parser('usage', help='获取空间用量')
    usage.add_argument('remote', nargs='?', default='/', help='远程目录路径')
    usage.set_defaults(handler=cmd_usage)

    purge = subparsers.add_parser('purge', help='刷新CDN缓存')
    purge.add_argument('urls', nargs='+', help='完整的http URL')
    purge.set_defaults(handler=cmd_purge)

    return parser.parse_args()


def main():
    """主函数"""
    args = parse_arguments()
    with UpYun() as client:
        ok = args.handler(client, args)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
