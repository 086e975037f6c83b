from parsemap import ParsemapClient, load_settings
from parsemap.log import setup_logging
from parsemap.service import AnnotationService


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)

    with ParsemapClient(settings.base_url, settings.api_key, settings.timeout) as client:
        service = AnnotationService(zones=client, points=client, config=settings.clustering)

        result = service.fetch_map_annotations(
            "list:paris",
            {
                "latitudeMin": 48.78,
                "longitudeMin": 2.26,
                "latitudeMax": 48.95,
                "longitudeMax": 2.43,
                "pixelWidth": 750,
                "pixelHeight": 1334,
                "annotationWidth": 30,
                "annotationHeight": 30,
            },
        )
        for cluster in result.clusters:
            print(cluster.cell, cluster.point_count, cluster.centroid)
        for point in result.points:
            print(point.identifier, point.name, point.latitude, point.longitude)

        zones = service.fetch_list_zones("list:paris")
        print(len(zones), "zones")


if __name__ == "__main__":
    main()
