"""
Upload an image to a running Icon Resizer server and print what it generated.

Usage:
    python tools/upload_icon.py icon.png [--platform both] [--output DIR]
    python tools/upload_icon.py --screenshots shot1.png shot2.png [--platform ios]
"""
import argparse
import os
import sys

import requests

SERVER = 'http://127.0.0.1:8000'


def main(argv=None):
    parser = argparse.ArgumentParser(description="Send images to the Icon Resizer API")
    parser.add_argument('images', nargs='+')
    parser.add_argument('--screenshots', action='store_true', help='Generate screenshots instead of icons')
    parser.add_argument('--platform', default=None)
    parser.add_argument('--output', default=None, help='output_dir to send (folder picker fallback)')
    parser.add_argument('--server', default=SERVER)
    parser.add_argument('--token', default=os.getenv('UPLOAD_TOKEN'))
    args = parser.parse_args(argv)
    if not args.screenshots and len(args.images) > 1:
        parser.error("icons are generated from a single image; pass --screenshots for several")

    data = {}
    if args.platform:
        data['platform'] = args.platform
    if args.output:
        data['output_dir'] = args.output
    headers = {'X-Upload-Token': args.token} if args.token else {}

    handles = []
    try:
        for p in args.images:
            handles.append(open(p, 'rb'))
        if args.screenshots:
            url = f"{args.server}/screenshots/"
            files = [('files', (os.path.basename(p), h, 'image/png')) for p, h in zip(args.images, handles)]
        else:
            url = f"{args.server}/icons/"
            files = {'file': (os.path.basename(args.images[0]), handles[0], 'image/png')}
        res = requests.post(url, files=files, data=data, headers=headers, timeout=120)
    except (OSError, requests.RequestException) as e:
        print('Error: ', e, file=sys.stderr)
        return 1
    finally:
        for h in handles:
            h.close()

    if res.status_code == 409:
        print('Default output folder is not writable; re-run with --output DIR', file=sys.stderr)
        return 2
    if not res.ok:
        print(f'Error {res.status_code}: {res.text}', file=sys.stderr)
        return 1

    body = res.json()
    print(body['message'])
    print('Location:', body['output_folder'])
    for item in body['files']:
        print('-', item['name'], item.get('url') or '')
    for path in body.get('failed', []):
        print('Failed:', path)
    for name in body.get('skipped', []):
        print('Skipped:', name)
    return 0


if __name__ == '__main__':
    sys.exit(main())
