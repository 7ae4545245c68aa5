import logging
import os

from flask import Flask, render_template, request
import matplotlib.pyplot as plt

from ieee80211p.analysis import (
    build_dataframe, load_simulation_traces, mean_absolute_deviation,
    cbr_relative_error, plot_pdr, plot_errors, plot_cbr,
)
from ieee80211p.config import default_params, SIMULATIONS_DIR
from ieee80211p.model import run_scenario, ModelResult

logger = logging.getLogger(__name__)

# Flask application and folder for the figures
app = Flask(__name__)
images_dir = os.path.join(app.static_folder, "images")
os.makedirs(images_dir, exist_ok=True)

# form field -> (parameter, type)
FORM_FIELDS = {
    "beta":        ("beta", float),
    "lambda":      ("lambda_", float),
    "pt":          ("pt", float),
    "packet_size": ("packet_size", int),
    "data_rate":   ("data_rate", float),
}


def read_params(form) -> dict:
    """Model parameters from the form; the data rate is given in Mbps."""
    params = {}
    for field, (name, cast) in FORM_FIELDS.items():
        params[name] = cast(form[field])
    params["data_rate"] *= 1e6
    return params


def save_figure(fig, name: str) -> str:
    fig.tight_layout()
    fig.savefig(os.path.join(images_dir, name))
    plt.close(fig)
    return f"images/{name}"


@app.route("/", methods=["GET", "POST"])
def index():
    error = None
    values = dict(default_params, data_rate=default_params["data_rate"] / 1e6)

    if request.method == "POST":
        # 1) Read the parameters from the form
        try:
            params = read_params(request.form)
            res: ModelResult = run_scenario(params)
        except (KeyError, ValueError) as exc:
            error = f"Invalid parameters: {exc}"
            return render_template("index.html", error=error, values=request.form), 400

        # 2) Simulation traces, if this configuration was simulated
        traces = load_simulation_traces(res.link, app.config.get("SIMULATIONS_DIR", SIMULATIONS_DIR))

        # 3) Figures
        pdr_image = save_figure(plot_pdr(res, traces), "pdr.png")
        errors_image = save_figure(plot_errors(res, traces), "errors.png")
        cbr_image = save_figure(plot_cbr(res, traces), "cbr.png")

        # 4) Tables
        df = build_dataframe(res).round(4).rename(columns={
            "distance_m": "Distance (m)", "pdr": "PDR", "delta_sen": "SEN",
            "delta_rxb": "RXB", "delta_pro": "PRO", "delta_col": "COL",
        })
        metrics_table = df.to_html(classes="table table-sm", index=False)

        mad_table = None
        cbr_error = None
        if traces is not None:
            mad = mean_absolute_deviation(res, traces).round(2)
            mad_table = mad.to_frame("MAD (%)").T.to_html(classes="table table-sm")
            if traces.cbr is not None:
                cbr_error = round(cbr_relative_error(res.cbr, traces.cbr), 2)

        return render_template(
            "results.html",
            title         = res.link.label(),
            cbr           = round(res.cbr, 4),
            cbr_sim       = None if traces is None else traces.cbr,
            cbr_error     = cbr_error,
            pdr_image     = pdr_image,
            errors_image  = errors_image,
            cbr_image     = cbr_image,
            metrics_table = metrics_table,
            mad_table     = mad_table,
        )

    # GET: main page
    return render_template("index.html", error=error, values=values)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True)
