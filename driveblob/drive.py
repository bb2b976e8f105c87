"""
This is the interface to the Google Drive v3 files API

Only the handful of calls the storage backend needs are implemented: listing
files by query, multipart upload, media download and delete. Requests go
through a google-auth AuthorizedSession, which is a requests.Session that
attaches the OAuth bearer token and refreshes it when it expires.

Unlike a name-addressed object store, Drive addresses files by an ID it
assigns at creation time, and any number of files may share a name. Mapping
names to IDs is left to the caller; see driveblob.storage.

No call is retried here. Errors are raised as IOError subclasses and it's up
to the caller whether to try again.
"""
import io
import json
import threading
import uuid
from logging import getLogger

from django.conf import settings
import google.auth.exceptions
from google.auth.transport.requests import AuthorizedSession

logger = getLogger("driveblob.drive")

API_URL = "https://www.googleapis.com/drive/v3"
UPLOAD_URL = "https://www.googleapis.com/upload/drive/v3"

# The per-application hidden folder. Files in it are invisible to the user's
# regular Drive and to other applications.
APP_DATA_FOLDER = "appDataFolder"

extra_headers = {
    'User-Agent': 'driveblob/Python3',
}


class DriveResponseError(IOError):
    """The Drive API returned an error response

    status_code holds the HTTP status and data the decoded error document,
    which for Drive looks like {"error": {"code": ..., "message": ...}}
    """
    def __init__(self, status_code, data):
        error = data.get("error") if isinstance(data, dict) else None
        if isinstance(error, dict) and "message" in error:
            message = error["message"]
        else:
            message = str(data)
        super().__init__("{}: {}".format(status_code, message))
        self.status_code = status_code
        self.data = data


class DriveFileNotFound(DriveResponseError):
    pass


class DriveAuthError(IOError):
    """The OAuth token could not be refreshed or applied to a request"""
    pass


def name_query(name):
    """Returns a files.list query matching files named exactly name

    Backslashes and single quotes are the only characters that need escaping
    inside a quoted string in the Drive query language.
    """
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return "name = '{}'".format(escaped)


class DriveFiles:
    """Represents the files collection of one Drive account

    This object should be thread safe, as it keeps a thread-local
    AuthorizedSession object for API calls. All sessions share the one
    credentials object.
    """
    def __init__(self, credentials, timeout=None):
        self.credentials = credentials
        if timeout is None:
            timeout = settings.DRIVEBLOB_TIMEOUT
        self.timeout = timeout

        self._local = threading.local()

    @property
    def session(self):
        # Initialize a new session for this thread if one doesn't exist
        try:
            return self._local.session
        except AttributeError:
            logger.debug("Initializing session for thread id {}".format(
                threading.get_ident()
            ))
            session = AuthorizedSession(self.credentials)
            session.headers.update(extra_headers)
            self._local.session = session
            return session

    def _request(self, method, url, **kwargs):
        """Issues one HTTP request and returns the response

        Raises DriveResponseError for any non-2xx status and DriveAuthError
        if the token refresh fails. Transport errors propagate as requests
        exceptions, which are IOErrors.
        """
        kwargs.setdefault("timeout", self.timeout)
        try:
            response = self.session.request(method, url, **kwargs)
        except google.auth.exceptions.GoogleAuthError as e:
            raise DriveAuthError(
                "Drive authorization failed: {}".format(e)) from e
        logger.debug("{} {} {} {:.2f}s".format(
            method,
            url,
            response.status_code,
            response.elapsed.total_seconds(),
        ))
        if not 200 <= response.status_code < 300:
            with response:
                self._raise_for_response(response)
        return response

    def _raise_for_response(self, response):
        try:
            data = response.json()
        except ValueError:
            data = {"error": {"message": response.reason or
                              "Non-2xx status code returned"}}
        if response.status_code == 404:
            raise DriveFileNotFound(response.status_code, data)
        raise DriveResponseError(response.status_code, data)

    def _json(self, response):
        try:
            return response.json()
        except ValueError:
            raise IOError("Invalid json response from Drive")

    def list(self, query, spaces=APP_DATA_FOLDER, fields="files(id)"):
        """Calls files.list and returns metadata for every matching file

        :param query: A Drive search query, see name_query()
        :param fields: The partial response selector for the file entries.
            Only the ID is fetched by default.

        Follows nextPageToken until all pages have been read.
        """
        files = []
        params = {
            'q': query,
            'spaces': spaces,
            'fields': "nextPageToken,{}".format(fields),
        }
        while True:
            data = self._json(self._request(
                "GET", "{}/files".format(API_URL), params=params,
            ))
            files.extend(data.get('files', []))
            page_token = data.get('nextPageToken')
            if not page_token:
                return files
            params = dict(params, pageToken=page_token)

    def create(self, name, content, parents=(APP_DATA_FOLDER,),
               mime_type="application/octet-stream"):
        """Uploads a new file with a multipart upload

        :param name: The file name. Drive does not check it for uniqueness.
        :param content: A bytes-like object holding the file contents
        :returns: metadata of the new file, including its id

        The body is a multipart/related document with the JSON metadata
        first and the media second.
        """
        logger.info("Uploading {!r}".format(name))
        boundary = uuid.uuid4().hex
        metadata = {
            'name': name,
            'parents': list(parents),
            'mimeType': mime_type,
        }
        body = b"".join([
            "--{}\r\n".format(boundary).encode("ascii"),
            b"Content-Type: application/json; charset=UTF-8\r\n\r\n",
            json.dumps(metadata).encode("utf-8"),
            "\r\n--{}\r\n".format(boundary).encode("ascii"),
            "Content-Type: {}\r\n\r\n".format(mime_type).encode("ascii"),
            bytes(content),
            "\r\n--{}--\r\n".format(boundary).encode("ascii"),
        ])
        response = self._request(
            "POST", "{}/files".format(UPLOAD_URL),
            params={'uploadType': "multipart", 'fields': "id,name"},
            headers={
                'Content-Type':
                    'multipart/related; boundary="{}"'.format(boundary),
            },
            data=body,
        )
        return self._json(response)

    def download(self, file_id):
        """Downloads a file's contents by ID and returns them as bytes"""
        logger.debug("Downloading {}".format(file_id))
        response = self._request(
            "GET", "{}/files/{}".format(API_URL, file_id),
            params={'alt': "media"},
            stream=True,
        )
        buf = io.BytesIO()
        with response:
            for chunk in response.iter_content(
                    chunk_size=io.DEFAULT_BUFFER_SIZE):
                buf.write(chunk)
        return buf.getvalue()

    def delete(self, file_id):
        """Permanently deletes a file by ID, skipping the trash"""
        self._request("DELETE", "{}/files/{}".format(API_URL, file_id))
