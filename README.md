# mockpager

A small mock HTTP server for exercising API clients that deal with paginated
responses. Each endpoint is described in a JSON configuration file. For every
endpoint the server loads a sample response document, finds its array field,
and answers each request with that document, the array replaced by copies of
its first record, as many as the page size calls for.

## Installation

```
pip install mockpager
```

## Configuration

```json
{
  "endpoints": [
    {
      "path": "/users",
      "method": "GET",
      "pagination": {
        "type": "page",
        "location": "query",
        "options": {"pageSizeKey": "pageSize", "pageCount": 3}
      },
      "responseObjFilePath": "responses/users.json",
      "responseField": "users"
    }
  ]
}
```

Every endpoint needs a non-empty `path` and `method`; otherwise loading fails
with `InvalidPathError` or `InvalidMethodError` (both `ConfigError`s).
`GET`, `POST`, `PUT`, `DELETE` and `PATCH` register a route for that method
only; any other method string registers the route for all methods. Path
segments written `:name` or `*name` match one segment or the rest of the path.

`responseObjFilePath` names a JSON object file, resolved against the base
directory (by default the parent of the working directory). When
`responseField` is left out, the first array-valued field of the document is
used; the array must hold at least one record.

### Pagination types

- `page` – serves `pageCount` pages, then answers `404` with
  `{"error": "record not found"}`. The page size is read under `pageSizeKey`
  from the place named by `location`: `query` (a non-integer value gives
  `500`), `header` (only positive integers count), or `body` (a JSON object;
  a non-number gives `400`).
- `offset` – answers every request with a page and never runs out. The limit
  parameter's name is not taken from the options, so every page holds the
  default page size (capped by `totalRecordCount`).
- `link` – serves `pageCount` pages, then `404`. The page size is read from
  the query string under `pageSizeKey` (positive integers only). Each page
  stores the absolute URL of the request, with its query keys sorted, under
  `linkKey`; a configured `linkKey` must already be a field of the document.

Any other type (including `token` and `none`) makes route setup fail.

### Options

| option             | default    | used by                              |
|--------------------|------------|--------------------------------------|
| `pageSizeKey`      | `pageSize` | `page`, `link`: page-size parameter  |
| `pageCount`        | `2`        | `page`, `link`: pages before `404`   |
| `totalRecordCount` | `200`      | all: records served in total         |
| `linkKey`          | `link`     | `link`: field that receives the link |

When no page size is given, a page holds 100 records. A page is cut short so
that no more than `totalRecordCount` records are served in all.

## Running

```
CONFIG_FILE_PATH=config.json PORT=8080 mockpager
```

Options: `--config` (default `$CONFIG_FILE_PATH`), `--port` (default `$PORT`;
if that is empty the system chooses a port) and `--base-dir` for response
files. The server stops cleanly on SIGINT, SIGTERM or SIGQUIT; the command
exits with status 1 if the configuration cannot be loaded or the server fails.

Logs go to standard error. `LEVEL=PRODUCTION` gives one JSON object per line at
info level; any other value gives tab-separated lines at debug level. Each
request is logged with its request and user ids, status, method, path, query,
client address, user agent and latency.

## Using it from Python

```python
from mockpager.config import load_config
from mockpager.server import create_app

config = load_config("config.json")
app = create_app(config, base_dir=".")
client = app.test_client()
print(client.get("/users?pageSize=5").get_json())
```

`run_server(config, port, base_dir)` serves the same application over HTTP.
Lower-level pieces: `mockpager.router.create_paginator` and `setup_routes`,
and `create_page_paginator`, `create_offset_paginator` and
`create_link_paginator` in their modules.

## Limitations

- The `headers`, `queryParams`, `requestBody` and `rateLimit` fields of an
  endpoint are read but not enforced, and the `pageKey` and `pageSize` options
  have no effect: pages are served in order, whatever page is asked for.
- Page and record counts are kept in memory per endpoint and never reset
  while the server runs.