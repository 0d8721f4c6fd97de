from pathlib import Path

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from dailydhan.models.report import CategoryTotal, MonthlyTotals
from dailydhan.utils.constants import EXPENSE_COLOR, INCOME_COLOR, palette_color_for
from dailydhan.utils.currency import format_compact


class ChartService:
    """Renders report data to PNG files without a GUI toolkit."""

    def __init__(self, dpi: int = 100, dark: bool = False):
        self._dpi = dpi
        self._dark = dark

    def _style_ax(self, ax, fig):
        bg = "#2b2b2b" if self._dark else "#ffffff"
        fg = "#aaaaaa" if self._dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    def _save(self, fig: Figure, path) -> str:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        FigureCanvasAgg(fig)
        fig.savefig(target, format="png", facecolor=fig.get_facecolor())
        return str(target)

    @staticmethod
    def _no_data(ax, text: str):
        ax.text(0.5, 0.5, text, ha="center", va="center",
                transform=ax.transAxes, color="gray")
        ax.set_xticks([])
        ax.set_yticks([])

    def render_category_pie(self, breakdown: list[CategoryTotal], path,
                            title: str = "Expenses by category") -> str:
        fig = Figure(figsize=(4, 4), dpi=self._dpi, tight_layout=True)
        ax = fig.add_subplot(111)
        self._style_ax(ax, fig)

        total = sum(c.total_amount for c in breakdown)
        if not breakdown or total <= 0:
            self._no_data(ax, "No expense data")
            return self._save(fig, path)

        ax.pie(
            [c.total_amount for c in breakdown],
            labels=[c.name for c in breakdown],
            colors=[c.color or palette_color_for(c.id) for c in breakdown],
            startangle=90,
            textprops={"fontsize": 7},
        )
        ax.set_aspect("equal")
        ax.set_title(title, fontsize=9)
        return self._save(fig, path)

    def render_income_expense_bars(self, series: list[MonthlyTotals], path,
                                   title: str = "Income vs expense") -> str:
        fig = Figure(figsize=(6, 3), dpi=self._dpi, tight_layout=True)
        ax = fig.add_subplot(111)
        self._style_ax(ax, fig)

        if not series or not any(m.income or m.expense for m in series):
            self._no_data(ax, "No data")
            return self._save(fig, path)

        labels = [m.month_name for m in series]
        x = list(range(len(labels)))
        w = 0.35
        ax.bar([i - w / 2 for i in x], [m.income for m in series], w,
               color=INCOME_COLOR, label="Income")
        ax.bar([i + w / 2 for i in x], [m.expense for m in series], w,
               color=EXPENSE_COLOR, label="Expense")
        ax.set_xticks(x)
        ax.set_xticklabels(labels)
        ax.yaxis.set_major_formatter(lambda v, _: format_compact(v))
        ax.legend(fontsize=7)
        ax.set_title(title, fontsize=9)
        return self._save(fig, path)
