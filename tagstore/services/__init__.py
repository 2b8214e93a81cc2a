from .row_materializer import RowMaterializer
from .search_query_builder import SearchPlan, SearchQueryBuilder
