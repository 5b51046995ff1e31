class PaginatePage:
    def offset_limit(self, page: int, per_page: int) -> tuple[int, int]:
        page = max(page, 1)
        per_page = min(max(per_page, 1), 500)
        return (page - 1) * per_page, per_page
