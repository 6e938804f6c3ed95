"""
vinyl — Load a vinyl collection and chart its ratings against price.

## Responsibilities
- Parse the semicolon-delimited collection file into typed album records.
- Derive the sorted/filtered view for a given set of chart toggles.
- Project the derived view onto an Altair chart.

## Public API
- core — AlbumRecord model, constants, errors, logging setup.
- io — ChartSettings and the collection loader.
- viz — Pure view derivation and the Altair chart builder.

## Import DAG discipline
- vinyl.core depends on stdlib and pydantic only.
- vinyl.io depends on vinyl.core, polars and requests.
- vinyl.viz depends on vinyl.core, vinyl.io.config, polars and altair.
- Nothing under vinyl imports streamlit; the UI shell lives in the app package.

## Examples
```python
from vinyl.io import ChartSettings, load_albums  # doctest: +SKIP
from vinyl.viz import ViewState, build_rating_chart, derive_view

settings = ChartSettings.load()  # doctest: +SKIP
records = load_albums(settings.source_url, settings=settings)  # doctest: +SKIP
chart = build_rating_chart(derive_view(records, ViewState()), settings)  # doctest: +SKIP
```
"""
