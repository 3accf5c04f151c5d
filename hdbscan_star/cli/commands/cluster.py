"""Cluster command implementation."""

from ...clustering import HDBSCANStarClusterer, compute_distance_matrix, evaluate_clustering
from ...config import HDBSCANParameters, METRIC_PRECOMPUTED, CLUSTERS_FILENAME, OUTLIER_SCORES_FILENAME
from ...io import load_vectors, load_constraints, save_clusters, write_outlier_scores_csv
from ...utils.io import read_json
from ..base import BaseCommand


class ClusterCommand(BaseCommand):
    """Command to run HDBSCAN* on vectors or a distance matrix."""

    def build_parameters(self) -> HDBSCANParameters:
        """Merge the optional config file with command line options."""
        if self.args.config_file:
            params = HDBSCANParameters.from_dict(read_json(self.args.config_file))
        else:
            params = HDBSCANParameters.default()

        if self.args.min_points is not None:
            params.min_points = self.args.min_points
        if self.args.min_cluster_size is not None:
            params.min_cluster_size = self.args.min_cluster_size
        if self.args.distance_matrix:
            params.metric = METRIC_PRECOMPUTED
        elif self.args.metric is not None:
            params.metric = self.args.metric
        if self.args.no_self_edges:
            params.self_edges = False

        return params.validate()

    def execute(self) -> None:
        """Execute clustering and save the results."""
        params = self.build_parameters()
        data = load_vectors(self.args.input)
        constraints = load_constraints(self.args.constraints) if self.args.constraints else None

        self.logger.info(f"Running HDBSCAN* with {params.to_dict()}")
        clusterer = HDBSCANStarClusterer.from_parameters(params, constraints=constraints)
        clusterer.cluster(data)

        results = clusterer.get_results()
        metadata = clusterer.get_params()
        if data.shape[0] > 1:
            distances = compute_distance_matrix(data, params.metric)
            metadata['evaluation'] = evaluate_clustering(distances, clusterer.labels_)

        output_dir = self.ensure_output_dir(self.args.output)
        save_clusters(results, output_dir / CLUSTERS_FILENAME, metadata=metadata)
        write_outlier_scores_csv(clusterer.outlier_scores_, output_dir / OUTLIER_SCORES_FILENAME)

        self.logger.info(f"Results saved to: {output_dir}")
        self.logger.info(f"Clusters found: {clusterer.n_clusters_}")
        self.logger.info(f"Noise points: {clusterer.n_noise_}")
