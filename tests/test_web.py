"""
End-to-end tests for the Flask gateway

Run with: python -m pytest tests/
"""
import pytest

from securefiles.auth import Identity
from securefiles.mime import NullSniffer
from web.app import create_app
from web.config import TestingConfig


PDF_BYTES = b'%PDF-1.4\n' + b'x' * 5000


@pytest.fixture
def media_dir(tmp_path):
    root = tmp_path / 'media'
    (root / 'course1').mkdir(parents=True)
    (root / 'course1' / 'intro.pdf').write_bytes(PDF_BYTES)
    (root / 'course1' / 'SCORM').mkdir()
    (root / 'course1' / 'SCORM' / 'player.js').write_text('console.log("hi");')
    (root / 'course1' / 'slides.pptx').write_bytes(b'PK\x03\x04')
    (root / 'course1' / 'blob.dat').write_bytes(b'\x00\x01\x02')
    (tmp_path / 'outside.txt').write_text('top secret')
    return root


def make_app(base_path, **settings):
    """Build an app with the session authenticator and no content sniffing"""
    overrides = {'BASE_PATH': base_path, 'MIME_SNIFFER': NullSniffer()}
    overrides.update(settings)
    config_class = type('Config', (TestingConfig,), overrides)
    return create_app(config_class)


def login(client, user_id=42):
    with client.session_transaction() as sess:
        sess['user_id'] = user_id


@pytest.fixture
def app(media_dir):
    return make_app(str(media_dir))


@pytest.fixture
def client(app):
    return app.test_client()


def test_serves_pdf_inline(client):
    """Authenticated request for an existing PDF"""
    login(client)
    response = client.get('/serve?file=course1/intro.pdf')

    assert response.status_code == 200
    assert response.headers['Content-Type'] == 'application/pdf'
    assert response.headers['Content-Disposition'].startswith('inline')
    assert response.headers['Content-Disposition'] == 'inline; filename="intro.pdf"'
    assert response.headers['Content-Length'] == str(len(PDF_BYTES))
    assert response.headers['X-Content-Type-Options'] == 'nosniff'
    assert 'private' in response.headers['Cache-Control']
    assert response.data == PDF_BYTES


def test_media_url_route(client):
    login(client)
    response = client.get('/media/course1/intro.pdf')

    assert response.status_code == 200
    assert response.data == PDF_BYTES


def test_script_served_as_javascript_with_public_cache(client):
    login(client)
    response = client.get('/media/course1/SCORM/player.js')

    assert response.status_code == 200
    assert response.headers['Content-Type'] == 'application/javascript'
    assert response.headers['Cache-Control'] == 'public, max-age=31536000, immutable'


def test_office_document_is_attachment(client):
    login(client)
    response = client.get('/serve?file=course1/slides.pptx')

    assert response.status_code == 200
    assert response.headers['Content-Disposition'].startswith('attachment')


def test_unknown_extension_is_binary_attachment(client):
    login(client)
    response = client.get('/serve?file=course1/blob.dat')

    assert response.headers['Content-Type'] == 'application/octet-stream'
    assert response.headers['Content-Disposition'] == 'attachment; filename="blob.dat"'


def test_traversal_emits_no_content(client):
    login(client)
    response = client.get('/serve?file=../../etc/passwd')

    assert response.status_code in (400, 404)
    assert b'root:' not in response.data
    assert response.data == b'The requested file path is invalid.'
    assert 'Content-Disposition' not in response.headers


def test_missing_file_is_generic_404(client):
    login(client)
    response = client.get('/serve?file=course1/nope.pdf')

    assert response.status_code == 404
    assert b'nope.pdf' not in response.data
    assert response.headers['Cache-Control'] == 'no-store'


def test_missing_file_parameter_is_invalid(client):
    login(client)
    assert client.get('/serve').status_code == 400


def test_unauthenticated_never_resolves_paths(client, monkeypatch):
    """Authentication fails before any filesystem work happens"""
    calls = []

    def spy_prepare(*args, **kwargs):
        calls.append(args)
        raise AssertionError("path resolution reached without authentication")

    monkeypatch.setattr('web.routes.files.prepare', spy_prepare)

    response = client.get('/serve?file=course1/intro.pdf')

    assert response.status_code == 403
    assert calls == []
    assert response.data == b'Access denied. You must be logged in to view this file.'


def test_unauthenticated_redirects_to_login(media_dir):
    client = make_app(str(media_dir), LOGIN_URL='/login').test_client()
    response = client.get('/media/course1/intro.pdf')

    assert response.status_code == 302
    assert response.headers['Location'].startswith('/login?next=')
    assert '%2Fmedia%2Fcourse1%2Fintro.pdf' in response.headers['Location']


def test_custom_authenticator(media_dir):
    """Hosts plug in their own session check"""
    def header_authenticator(request):
        if request.headers.get('X-Remote-User'):
            return Identity(request.headers['X-Remote-User'])
        return None

    client = make_app(str(media_dir), AUTHENTICATOR=staticmethod(header_authenticator)).test_client()

    assert client.get('/serve?file=course1/intro.pdf').status_code == 403
    response = client.get('/serve?file=course1/intro.pdf', headers={'X-Remote-User': 'alice'})
    assert response.status_code == 200


def test_loopback_callers_get_no_bypass(client):
    """Being local is not the same as being logged in"""
    response = client.get('/serve?file=course1/intro.pdf',
                          environ_base={'REMOTE_ADDR': '127.0.0.1'})
    assert response.status_code == 403


def test_unconfigured_base_path_is_config_error(tmp_path):
    client = make_app(None).test_client()
    login(client)

    response = client.get('/serve?file=course1/intro.pdf')

    assert response.status_code == 500
    assert b'base media path is invalid' in response.data


def test_no_debug_headers_leak(client):
    login(client)
    response = client.get('/serve?file=course1/intro.pdf')

    assert not [name for name in response.headers.keys() if 'debug' in name.lower()]


def test_dot_dot_inside_name_is_rejected(client, media_dir):
    """The literal traversal marker is refused even inside a file name"""
    (media_dir / 'course1' / 'a..b.pdf').write_bytes(PDF_BYTES)
    login(client)

    response = client.get('/serve?file=course1/a..b.pdf')

    assert response.status_code == 400
    assert PDF_BYTES not in response.data
